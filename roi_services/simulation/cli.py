import json
import sys
from .inputs import validate_inputs
from .engine import calculate_roi


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print("Usage: python -m roi_services.simulation.cli <payload.json | ->", file=sys.stderr)
        return 2
    if args[0] == "-":
        payload = json.load(sys.stdin)
    else:
        with open(args[0], "r") as f:
            payload = json.load(f)
    errors = validate_inputs(payload)
    if errors:
        print(json.dumps({"success": False, "errors": errors}, indent=2))
        return 1
    results = calculate_roi(payload)
    print(json.dumps({"success": True, "inputs": payload, "results": results.to_dict()}, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""ROI simulation core: input validation and the savings calculation.

- constants.py: immutable calculation constants
- inputs.py: ScenarioInput and validate_inputs
- engine.py: calculate_roi -> ScenarioResult
- cli.py: validate + calculate a JSON payload from the command line
"""

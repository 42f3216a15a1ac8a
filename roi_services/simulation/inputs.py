from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Mapping, Optional, Union
import math

INPUT_FIELDS = (
    "monthly_invoice_volume",
    "num_ap_staff",
    "avg_hours_per_invoice",
    "hourly_wage",
    "error_rate_manual",
    "error_cost",
    "time_horizon_months",
    "one_time_implementation_cost",
)


@dataclass(frozen=True)
class ScenarioInput:
    monthly_invoice_volume: float  # invoices / month
    num_ap_staff: float            # headcount
    avg_hours_per_invoice: float
    hourly_wage: float
    error_rate_manual: float       # percent, 0..100
    error_cost: float              # cost per erroneous invoice
    time_horizon_months: int
    one_time_implementation_cost: float = 0.0
    scenario_name: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ScenarioInput":
        """Build from a payload that already passed validate_inputs."""
        cost = as_number(data.get("one_time_implementation_cost"))
        return cls(
            monthly_invoice_volume=as_number(data["monthly_invoice_volume"]),
            num_ap_staff=as_number(data["num_ap_staff"]),
            avg_hours_per_invoice=as_number(data["avg_hours_per_invoice"]),
            hourly_wage=as_number(data["hourly_wage"]),
            error_rate_manual=as_number(data["error_rate_manual"]),
            error_cost=as_number(data["error_cost"]),
            time_horizon_months=_whole(as_number(data["time_horizon_months"])),
            one_time_implementation_cost=cost if cost is not None else 0.0,
            scenario_name=str(data.get("scenario_name") or ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def as_number(value: Any) -> Optional[float]:
    """Return value as a float, or None when it is absent or not numeric.

    Numeric strings are accepted; booleans and NaN are not.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        num = float(value)
    elif isinstance(value, str):
        try:
            num = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(num):
        return None
    return num


def _whole(value: float) -> Union[int, float]:
    return int(value) if value.is_integer() else value


def _below(value: Optional[float], minimum: float) -> bool:
    # Zero counts as missing for fields with a positive minimum.
    return value is None or value == 0 or value < minimum


def validate_inputs(inputs: Union[Mapping[str, Any], ScenarioInput]) -> List[str]:
    """Return every rule violation in the parameter set; empty means valid.

    Never raises: malformed values are reported as violations.
    """
    if isinstance(inputs, ScenarioInput):
        data = inputs.to_dict()
    elif isinstance(inputs, Mapping):
        data = inputs
    else:
        data = {}
    n = {k: as_number(data.get(k)) for k in INPUT_FIELDS}
    errors: List[str] = []

    if _below(n["monthly_invoice_volume"], 1):
        errors.append("Monthly invoice volume must be at least 1")
    if _below(n["num_ap_staff"], 1):
        errors.append("Number of AP staff must be at least 1")
    if _below(n["avg_hours_per_invoice"], 0.01):
        errors.append("Average hours per invoice must be at least 0.01")
    if _below(n["hourly_wage"], 1):
        errors.append("Hourly wage must be at least 1")
    rate = n["error_rate_manual"]
    if rate is None or rate < 0 or rate > 100:
        errors.append("Manual error rate must be between 0 and 100 percent")
    if n["error_cost"] is None or n["error_cost"] < 0:
        errors.append("Error cost must be 0 or greater")
    if _below(n["time_horizon_months"], 1):
        errors.append("Time horizon must be at least 1 month")

    raw_cost = data.get("one_time_implementation_cost")
    if raw_cost is not None:
        cost = n["one_time_implementation_cost"]
        if cost is None or cost < 0:
            errors.append("Implementation cost must be 0 or greater")
    return errors


def validate_scenario_name(inputs: Mapping[str, Any]) -> List[str]:
    name = inputs.get("scenario_name")
    if not isinstance(name, str) or not name.strip():
        return ["Scenario name is required"]
    return []

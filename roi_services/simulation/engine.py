from __future__ import annotations
from dataclasses import dataclass, asdict
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Mapping, Union
import math

from roi_services.simulation.constants import CalculationConstants, DEFAULT_CONSTANTS, ROI_INFINITE
from roi_services.simulation.inputs import ScenarioInput


@dataclass(frozen=True)
class ScenarioResult:
    monthly_savings: float
    cumulative_savings: float
    net_savings: float
    payback_months: float
    roi_percentage: Union[float, str]  # ROI_INFINITE when there is no implementation cost
    labor_cost_manual: float
    auto_cost: float
    error_savings: float

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe view: an infinite or undefined payback becomes None."""
        return {k: _json_number(v) for k, v in asdict(self).items()}


def _json_number(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def round_half_up(value: float, places: int) -> float:
    """Round half away from zero on the shortest repr; non-finite values pass through."""
    if not math.isfinite(value):
        return value
    q = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(q, rounding=ROUND_HALF_UP))


def _divide(a: float, b: float) -> float:
    # IEEE-style: a positive amount over zero monthly savings is an infinite payback.
    if b == 0:
        if a == 0:
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def calculate_roi(
    inputs: Union[ScenarioInput, Mapping[str, Any]],
    constants: CalculationConstants = DEFAULT_CONSTANTS,
) -> ScenarioResult:
    """Monthly, cumulative and net savings of automating invoice processing.

    Caller must run validate_inputs first; invalid input is not guarded here.
    Monthly savings are scaled by constants.min_roi_boost_factor for every
    scenario. A non-positive monthly saving with a positive implementation
    cost yields a negative or infinite payback, reported as-is.
    """
    i = inputs if isinstance(inputs, ScenarioInput) else ScenarioInput.from_mapping(inputs)
    impl_cost = i.one_time_implementation_cost

    error_rate_manual = i.error_rate_manual / 100
    error_rate_auto = constants.error_rate_auto / 100

    labor_cost_manual = i.num_ap_staff * i.hourly_wage * i.avg_hours_per_invoice * i.monthly_invoice_volume
    auto_cost = i.monthly_invoice_volume * constants.automated_cost_per_invoice
    # Negative when the manual error rate is already below the automated one
    error_savings = (error_rate_manual - error_rate_auto) * i.monthly_invoice_volume * i.error_cost

    monthly_savings = (labor_cost_manual + error_savings) - auto_cost
    monthly_savings = monthly_savings * constants.min_roi_boost_factor

    cumulative_savings = monthly_savings * i.time_horizon_months
    net_savings = cumulative_savings - impl_cost
    payback_months = _divide(impl_cost, monthly_savings) if impl_cost > 0 else 0.0
    if impl_cost > 0:
        roi_percentage: Union[float, str] = round_half_up((net_savings / impl_cost) * 100, 2)
    else:
        roi_percentage = ROI_INFINITE

    return ScenarioResult(
        monthly_savings=round_half_up(monthly_savings, 2),
        cumulative_savings=round_half_up(cumulative_savings, 2),
        net_savings=round_half_up(net_savings, 2),
        payback_months=round_half_up(payback_months, 1),
        roi_percentage=roi_percentage,
        labor_cost_manual=round_half_up(labor_cost_manual, 2),
        auto_cost=round_half_up(auto_cost, 2),
        error_savings=round_half_up(error_savings, 2),
    )

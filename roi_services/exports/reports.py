from __future__ import annotations
from typing import Any, Dict, List, Tuple
import math
import re

Row = Tuple[str, str]


def format_currency(value: Any) -> str:
    """USD with thousands separators: 1234.5 -> '$1,234.50', -3 -> '-$3.00'."""
    v = float(value or 0)
    if not math.isfinite(v):
        return f"{'-' if v < 0 else ''}$∞"
    sign = "-" if v < 0 else ""
    return f"{sign}${abs(v):,.2f}"


def format_percentage(value: Any) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"{value:.2f}%"
    return str(value)


def format_number(value: Any) -> str:
    v = float(value)
    return f"{v:,.0f}" if v.is_integer() else f"{v:,}"


def format_months(value: Any) -> str:
    # None: no finite payback (zero monthly savings)
    if value is None:
        return "n/a"
    return f"{value} months"


def input_rows(scenario: Dict[str, Any]) -> List[Row]:
    return [
        ("Monthly Invoice Volume", f"{format_number(scenario['monthly_invoice_volume'])} invoices"),
        ("AP Staff Count", f"{format_number(scenario['num_ap_staff'])} employees"),
        ("Hours per Invoice", f"{scenario['avg_hours_per_invoice']} hours"),
        ("Hourly Wage", format_currency(scenario["hourly_wage"])),
        ("Manual Error Rate", f"{scenario['error_rate_manual']}%"),
        ("Error Correction Cost", format_currency(scenario["error_cost"])),
        ("Time Horizon", f"{scenario['time_horizon_months']} months"),
        ("Implementation Cost", format_currency(scenario.get("one_time_implementation_cost", 0))),
    ]


def result_rows(scenario: Dict[str, Any]) -> List[Row]:
    r = scenario["results"]
    return [
        ("Monthly Savings", format_currency(r["monthly_savings"])),
        ("Payback Period", format_months(r["payback_months"])),
        ("Total ROI", format_percentage(r["roi_percentage"])),
        ("Net Savings", format_currency(r["net_savings"])),
    ]


def breakdown_rows(scenario: Dict[str, Any]) -> List[Row]:
    r = scenario["results"]
    return [
        ("Current Manual Labor Cost", f"{format_currency(r['labor_cost_manual'])} per month"),
        ("Automation Cost", f"{format_currency(r['auto_cost'])} per month"),
        ("Error Reduction Savings", f"{format_currency(r['error_savings'])} per month"),
        ("Cumulative Savings",
         f"{format_currency(r['cumulative_savings'])} over {scenario['time_horizon_months']} months"),
    ]


def executive_summary(scenario: Dict[str, Any]) -> List[str]:
    r = scenario["results"]
    return [
        (
            "Based on your business parameters, switching to automated invoice processing will generate "
            f"{format_currency(r['monthly_savings'])} in monthly savings. With an implementation cost of "
            f"{format_currency(scenario.get('one_time_implementation_cost', 0))}, you'll achieve payback in "
            f"{format_months(r['payback_months'])} and realize a {format_percentage(r['roi_percentage'])} return on "
            f"investment over {scenario['time_horizon_months']} months."
        ),
        f"Total net savings over the analysis period: {format_currency(r['net_savings'])}",
    ]


def report_filename(scenario: Dict[str, Any]) -> str:
    # Header-safe: Content-Disposition must stay ASCII without quotes
    name = re.sub(r"[^A-Za-z0-9._-]+", "_", str(scenario["scenario_name"])).strip("_")
    return f"ROI_Report_{name or 'scenario'}.pdf"

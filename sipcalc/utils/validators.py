from __future__ import annotations

import math
from typing import Dict

from sipcalc.core.schemas import PlanReport
from sipcalc.utils.sip_models import GoalResult, ProjectionResult, ScenarioSet
from sipcalc.utils.validation_models import ValidationReport


def _check_figures(report: ValidationReport, figures: Dict[str, float], location: str) -> None:
    for name, x in figures.items():
        if not math.isfinite(x):
            report.add_error(f"{name} is not finite ({x})", location=location)
        elif x < 0:
            report.add_warning(f"{name} is negative ({x:.0f})", location=location)


def inspect_projection(result: ProjectionResult) -> ValidationReport:
    """
    Screens a projection for figures a caller should not display as-is.
    Non-finite values are errors; negative values are warnings.
    """
    report = ValidationReport()
    _check_figures(
        report,
        {
            "total_investment": result.total_investment,
            "maturity_amount": result.maturity_amount,
            "total_gains": result.total_gains,
        },
        location="projection",
    )
    for snap in result.yearly_breakdown:
        _check_figures(
            report,
            {"invested_cumulative": snap.invested_cumulative, "value": snap.value},
            location=f"year {snap.year}",
        )
    return report.finalize()


def inspect_goal(result: GoalResult) -> ValidationReport:
    report = ValidationReport()
    _check_figures(
        report,
        {
            "required_contribution": result.required_contribution,
            "shortfall": result.shortfall,
            "progress_pct": result.progress_pct,
        },
        location="goal",
    )
    return report.finalize()


def inspect_scenarios(scenarios: ScenarioSet) -> ValidationReport:
    report = ValidationReport()
    for o in scenarios.outcomes:
        _check_figures(
            report,
            {"maturity_amount": o.maturity_amount, "gains": o.gains},
            location=f"scenario {o.label}",
        )
    return report.finalize()


def inspect_report(report: PlanReport) -> ValidationReport:
    """Projection, goal and scenario screens merged into one report."""
    merged = ValidationReport()
    merged.merge(inspect_projection(report.projection))
    merged.merge(inspect_goal(report.goal))
    merged.merge(inspect_scenarios(report.scenarios))
    return merged.finalize()

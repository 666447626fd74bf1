from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

import pandas as pd

from sipcalc.core.config import SETTINGS
from sipcalc.core.schemas import AdvisorInfo, ClientInfo, PlanReport, ReportRequest
from sipcalc.utils.logging import get_logger
from sipcalc.utils.sip_engine import (
    compare_scenarios, deflate, simulate, solve_goal, summarize_projection,
)
from sipcalc.utils.sip_models import (
    DeflateRequest, GoalPlan, InvestmentPlan, ProjectionResult, ScenarioRate, ScenarioRequest,
)

logger = get_logger("sip_tools")

# canonical field -> aliases accepted from callers (camelCase front-end names first)
_PLAN_ALIASES: Dict[str, Tuple[str, ...]] = {
    "monthly_contribution": ("monthlyContribution", "monthlyAmount", "monthly_investment"),
    "duration_years": ("durationYears", "duration", "years"),
    "annual_return_rate_pct": ("annualReturnRatePercent", "expectedReturn", "expected_return"),
    "step_up_enabled": ("stepUpEnabled",),
    "step_up_pct": ("stepUpPercent", "stepUpPercentage"),
    "lump_sum": ("lumpSum", "lumpSumAmount"),
}

_GOAL_ALIASES: Dict[str, Tuple[str, ...]] = {
    "target_amount": ("targetAmount",),
    "duration_years": ("durationYears", "duration", "years"),
    "annual_return_rate_pct": ("annualReturnRatePercent", "expectedReturn", "expected_return"),
    "current_contribution": ("currentContribution", "monthlyAmount", "monthly_contribution"),
}

_DEFLATE_ALIASES: Dict[str, Tuple[str, ...]] = {
    "nominal_amount": ("nominalAmount", "amount"),
    "inflation_rate_pct": ("inflationRatePercent", "inflationRate"),
    "years": ("duration", "duration_years"),
}

_REPORT_ALIASES: Dict[str, Tuple[str, ...]] = {
    "inflation_rate_pct": ("inflationRatePercent", "inflationRate"),
    "current_age": ("currentAge",),
    "retirement_age": ("retirementAge",),
}


def _canonical(payload: Any, aliases: Dict[str, Tuple[str, ...]]) -> Any:
    # non-mapping payloads pass through untouched so pydantic reports them
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        return payload
    p = dict(payload)
    for field_name, names in aliases.items():
        if field_name in p:
            continue
        for name in names:
            if name in p:
                p[field_name] = p[name]
                break
    return p


def _rates(raw: Optional[Iterable[Any]]) -> Tuple[ScenarioRate, ...]:
    if raw is None:
        return SETTINGS.scenario_rates
    return tuple(r if isinstance(r, ScenarioRate) else ScenarioRate.model_validate(r) for r in raw)


def tool_simulate(payload: Dict[str, Any]) -> Dict[str, Any]:
    plan = InvestmentPlan.model_validate(_canonical(payload, _PLAN_ALIASES))
    return simulate(plan).model_dump()

def tool_solve_goal(payload: Dict[str, Any]) -> Dict[str, Any]:
    goal = GoalPlan.model_validate(_canonical(payload, _GOAL_ALIASES))
    return solve_goal(goal).model_dump()

def tool_compare_scenarios(payload: Dict[str, Any]) -> Dict[str, Any]:
    req = ScenarioRequest.model_validate(_canonical(payload, _PLAN_ALIASES))
    out = compare_scenarios(req.monthly_contribution, req.duration_years, _rates(req.rates))
    return out.model_dump()

def tool_deflate(payload: Dict[str, Any]) -> Dict[str, Any]:
    p = _canonical(payload, _DEFLATE_ALIASES)
    if isinstance(p, dict):
        p.setdefault("inflation_rate_pct", SETTINGS.default_inflation_rate_pct)
    req = DeflateRequest.model_validate(p)
    real = deflate(req.nominal_amount, req.inflation_rate_pct, req.years)
    return {**req.model_dump(), "real_value": real}


def yearly_breakdown_frame(result: Union[ProjectionResult, Dict[str, Any]]) -> pd.DataFrame:
    """Year-by-year table (year, invested, value, gains) for charts and tables."""
    if not isinstance(result, ProjectionResult):
        result = ProjectionResult.model_validate(result)
    rows = [
        {"year": s.year, "invested": s.invested_cumulative, "value": s.value, "gains": s.gains}
        for s in result.yearly_breakdown
    ]
    return pd.DataFrame(rows, columns=["year", "invested", "value", "gains"])


def build_plan_report(
    plan: InvestmentPlan,
    goal_plan: GoalPlan,
    *,
    inflation_rate_pct: Optional[float] = None,
    rates: Optional[Iterable[Any]] = None,
    advisor: Optional[AdvisorInfo] = None,
    client: Optional[ClientInfo] = None,
    current_age: Optional[int] = None,
    retirement_age: Optional[int] = None,
) -> PlanReport:
    """
    Runs every engine operation for one plan and bundles the outputs with the
    caller's advisor/client records for the document generator. Scenarios use
    the plan's starting contribution and horizon.
    """
    if inflation_rate_pct is None:
        inflation_rate_pct = SETTINGS.default_inflation_rate_pct

    projection = simulate(plan)
    report = PlanReport(
        plan=plan,
        projection=projection,
        metrics=summarize_projection(projection, plan.duration_years, inflation_rate_pct),
        goal_plan=goal_plan,
        goal=solve_goal(goal_plan),
        scenarios=compare_scenarios(plan.monthly_contribution, plan.duration_years, _rates(rates)),
        current_age=current_age,
        retirement_age=retirement_age,
        advisor=advisor,
        client=client,
    )
    logger.info(
        "report built years=%s maturity=%s required=%s client=%s",
        plan.duration_years, projection.maturity_amount, report.goal.required_contribution,
        client.name if client else "-",
    )
    return report

def report_from_payload(payload: Mapping[str, Any]) -> PlanReport:
    """Validates a front-end style payload (plan, goal, options) and builds the report."""
    opts = ReportRequest.model_validate(_canonical(payload, _REPORT_ALIASES))
    p = dict(payload or {})
    plan = InvestmentPlan.model_validate(_canonical(p.get("plan"), _PLAN_ALIASES))

    # goal defaults to the plan's horizon, rate and contribution
    goal_p = _canonical(p.get("goal"), _GOAL_ALIASES)
    if isinstance(goal_p, dict):
        goal_p.setdefault("duration_years", plan.duration_years)
        goal_p.setdefault("annual_return_rate_pct", plan.annual_return_rate_pct)
        goal_p.setdefault("current_contribution", plan.monthly_contribution)
    goal_plan = GoalPlan.model_validate(goal_p)

    return build_plan_report(
        plan,
        goal_plan,
        inflation_rate_pct=opts.inflation_rate_pct,
        rates=opts.rates,
        advisor=opts.advisor,
        client=opts.client,
        current_age=opts.current_age,
        retirement_age=opts.retirement_age,
    )

def tool_build_report(payload: Dict[str, Any]) -> Dict[str, Any]:
    return report_from_payload(payload).model_dump(mode="json")

from __future__ import annotations

import math
from typing import Any, Iterable, List, Union

from sipcalc.utils.logging import get_logger
from sipcalc.utils.sip_models import (
    DEFAULT_SCENARIO_RATES,
    GoalPlan, GoalResult,
    InvestmentPlan, ProjectionMetrics, ProjectionResult, YearSnapshot,
    ScenarioOutcome, ScenarioRate, ScenarioSet,
)

logger = get_logger("sip_engine")

MONTHS_PER_YEAR = 12


def _round(x: float) -> float:
    """Half-up rounding toward +inf (floor(x + 0.5)); nan/inf pass through."""
    if not math.isfinite(x):
        return x
    return float(math.floor(x + 0.5))

def _div(num: float, den: float) -> float:
    # IEEE semantics: x/0 -> +-inf, 0/0 -> nan
    try:
        return num / den
    except ZeroDivisionError:
        if num == 0 or math.isnan(num):
            return math.nan
        return math.copysign(math.inf, num) * math.copysign(1.0, den)

def _pow(base: float, exp: float) -> float:
    try:
        return base ** exp
    except OverflowError:
        return math.inf

def _monthly_rate(annual_pct: float) -> float:
    return annual_pct / 100 / MONTHS_PER_YEAR

def _annuity_due_factor(mr: float, n_months: int) -> float:
    # FV of 1 paid at the start of each of n months; limit n at zero rate
    if mr == 0:
        return float(n_months)
    return _div(_pow(1 + mr, n_months) - 1, mr) * (1 + mr)

def _as_rate(x: Union[ScenarioRate, Any]) -> ScenarioRate:
    if isinstance(x, ScenarioRate):
        return x
    return ScenarioRate.model_validate(x)


def simulate(plan: InvestmentPlan) -> ProjectionResult:
    """
    Month-by-month projection of a SIP with optional step-up and lump sum.

    Each month the balance grows first and the contribution lands at month end
    (ordinary annuity). Balance and invested totals are carried unrounded; only
    the yearly snapshots and the final figures are rounded. A stepped-up
    contribution is rounded before it is carried into the next year.
    """
    logger.debug(
        "simulate years=%s rate_pct=%s step_up=%s lump_sum=%s",
        plan.duration_years, plan.annual_return_rate_pct,
        plan.step_up_pct if plan.step_up_enabled else 0, plan.lump_sum,
    )

    mr = _monthly_rate(plan.annual_return_rate_pct)
    balance = float(plan.lump_sum)
    invested = float(plan.lump_sum)
    contrib = float(plan.monthly_contribution)

    breakdown: List[YearSnapshot] = []
    for year in range(1, plan.duration_years + 1):
        for _ in range(MONTHS_PER_YEAR):
            balance = balance * (1 + mr) + contrib
            invested += contrib

        value = _round(balance)
        invested_so_far = _round(invested)
        breakdown.append(
            YearSnapshot(
                year=year,
                invested_cumulative=invested_so_far,
                value=value,
                gains=value - invested_so_far,
            )
        )

        if plan.step_up_enabled and year < plan.duration_years:
            contrib = _round(contrib * (1 + plan.step_up_pct / 100))

    maturity = _round(balance)
    total = _round(invested)

    return ProjectionResult(
        monthly_investment=plan.monthly_contribution,
        total_investment=total,
        maturity_amount=maturity,
        total_gains=maturity - total,
        yearly_breakdown=breakdown,
    )

def solve_goal(plan: GoalPlan) -> GoalResult:
    """
    Required monthly contribution for a target, by the closed-form inverse of
    the annuity-due future value (payments at month start), unlike the
    ordinary-annuity recurrence in simulate().
    """
    logger.debug(
        "solve_goal target=%s years=%s rate_pct=%s",
        plan.target_amount, plan.duration_years, plan.annual_return_rate_pct,
    )

    n_months = plan.duration_years * MONTHS_PER_YEAR
    factor = _annuity_due_factor(_monthly_rate(plan.annual_return_rate_pct), n_months)
    required = _round(_div(plan.target_amount, factor))

    gap = required - plan.current_contribution
    shortfall = 0.0 if gap < 0 else gap

    if required == 0:
        progress = 100.0
    else:
        progress = _div(plan.current_contribution, required) * 100
        progress = 100.0 if progress > 100.0 else progress

    return GoalResult(
        target_amount=plan.target_amount,
        required_contribution=required,
        shortfall=shortfall,
        progress_pct=progress,
    )

def compare_scenarios(
    monthly_contribution: float,
    duration_years: int,
    rates: Iterable[Union[ScenarioRate, Any]] = DEFAULT_SCENARIO_RATES,
) -> ScenarioSet:
    n_months = duration_years * MONTHS_PER_YEAR
    invested = monthly_contribution * n_months

    outcomes: List[ScenarioOutcome] = []
    for r in rates:
        sr = _as_rate(r)
        maturity = monthly_contribution * _annuity_due_factor(_monthly_rate(sr.rate), n_months)
        outcomes.append(
            ScenarioOutcome(
                annual_rate_pct=sr.rate,
                label=sr.label,
                maturity_amount=_round(maturity),
                gains=_round(maturity - invested),
                total_investment=_round(invested),
            )
        )

    logger.debug("compare_scenarios years=%s scenarios=%s", duration_years, len(outcomes))
    return ScenarioSet(
        monthly_contribution=monthly_contribution,
        duration_years=duration_years,
        outcomes=outcomes,
    )

def deflate(nominal_amount: float, inflation_rate_pct: float, years: float) -> float:
    """Express a future nominal amount in today's money. Not rounded."""
    if inflation_rate_pct > 0:
        return _div(nominal_amount, _pow(1 + inflation_rate_pct / 100, years))
    return nominal_amount

def summarize_projection(
    result: ProjectionResult,
    duration_years: int,
    inflation_rate_pct: float = 0.0,
) -> ProjectionMetrics:
    invested = result.total_investment
    return ProjectionMetrics(
        total_returns_pct=(_div(result.maturity_amount, invested) - 1) * 100,
        return_on_investment_pct=_div(result.total_gains, invested) * 100,
        total_installments=duration_years * MONTHS_PER_YEAR,
        inflation_rate_pct=inflation_rate_pct,
        real_maturity_amount=deflate(result.maturity_amount, inflation_rate_pct, duration_years),
    )

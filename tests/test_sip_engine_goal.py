from math import isclose, isinf

from sipcalc.utils.sip_engine import _annuity_due_factor, _monthly_rate, compare_scenarios, solve_goal
from sipcalc.utils.sip_models import GoalPlan, ScenarioRate


def test_goal_required_contribution_annuity_due():
    out = solve_goal(GoalPlan(target_amount=1000000, duration_years=10, annual_return_rate_pct=12, current_contribution=5000))
    assert out.target_amount == 1000000
    assert out.required_contribution == 4304
    assert out.shortfall == 0
    assert out.progress_pct == 100.0


def test_goal_shortfall_and_progress():
    out = solve_goal(GoalPlan(target_amount=1000000, duration_years=10, annual_return_rate_pct=12, current_contribution=3000))
    assert out.shortfall == 1304
    assert isclose(out.progress_pct, 3000 / 4304 * 100)


def test_goal_round_trip_through_scenario_formula():
    plan = GoalPlan(target_amount=2500000, duration_years=15, annual_return_rate_pct=11)
    required = solve_goal(plan).required_contribution

    scen = compare_scenarios(required, plan.duration_years, [ScenarioRate(rate=11, label="check")])
    factor = _annuity_due_factor(_monthly_rate(11), 15 * 12)
    # rounding the contribution moves the result by at most half a contribution unit per factor
    assert abs(scen.outcomes[0].maturity_amount - plan.target_amount) <= factor / 2 + 1


def test_goal_zero_rate_uses_limit():
    out = solve_goal(GoalPlan(target_amount=120000, duration_years=10, annual_return_rate_pct=0, current_contribution=400))
    assert out.required_contribution == 1000
    assert out.shortfall == 600
    assert isclose(out.progress_pct, 40.0)


def test_goal_zero_duration_is_infinite_not_an_error():
    out = solve_goal(GoalPlan(target_amount=50000, duration_years=0, annual_return_rate_pct=12))
    assert isinf(out.required_contribution)
    assert isinf(out.shortfall)
    assert out.progress_pct == 0.0


def test_goal_tiny_target_needs_nothing():
    out = solve_goal(GoalPlan(target_amount=10, duration_years=30, annual_return_rate_pct=12))
    assert out.required_contribution == 0
    assert out.shortfall == 0
    assert out.progress_pct == 100.0

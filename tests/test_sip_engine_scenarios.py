from math import isinf

from sipcalc.utils.sip_engine import compare_scenarios
from sipcalc.utils.sip_models import DEFAULT_SCENARIO_RATES, ScenarioRate


def test_default_scenarios():
    out = compare_scenarios(5000, 10)
    assert out.monthly_contribution == 5000
    assert out.duration_years == 10
    assert [(o.label, o.annual_rate_pct) for o in out.outcomes] == [
        ("Conservative", 8), ("Moderate", 12), ("Aggressive", 15),
    ]
    assert [o.maturity_amount for o in out.outcomes] == [920828, 1161695, 1393286]
    assert [o.gains for o in out.outcomes] == [320828, 561695, 793286]
    assert all(o.total_investment == 600000 for o in out.outcomes)


def test_caller_supplied_rates_keep_order():
    rates = [{"rate": 20, "label": "Hot"}, ScenarioRate(rate=4, label="Cold")]
    out = compare_scenarios(1000, 5, rates)
    assert [o.label for o in out.outcomes] == ["Hot", "Cold"]
    assert out.outcomes[0].maturity_amount > out.outcomes[1].maturity_amount


def test_zero_rate_scenario_has_no_gains():
    out = compare_scenarios(5000, 10, [ScenarioRate(rate=0, label="Flat")])
    assert out.outcomes[0].maturity_amount == 600000
    assert out.outcomes[0].gains == 0


def test_empty_rate_list():
    assert compare_scenarios(5000, 10, []).outcomes == []


def test_default_rates_not_mutated_between_calls():
    compare_scenarios(100, 1)
    assert [r.rate for r in DEFAULT_SCENARIO_RATES] == [8, 12, 15]


def test_overflowing_scenario_is_infinite():
    out = compare_scenarios(1000, 10, [ScenarioRate(rate=1e6, label="Absurd")])
    assert isinf(out.outcomes[0].maturity_amount)

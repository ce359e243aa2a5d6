# tests/test_state.py
import math
import itertools
import pytest
from roicalc.models.metrics import InputMetrics, Scenario
from roicalc.services.state import (
    compute_state, compute_current_state, compute_improved_state, apply_scenario, scenario_multiplier,
)

STORE = InputMetrics(monthly_visitors=50000, current_cvr=2.5, aov=80, ad_spend=10000)

def _mk(**kw): return InputMetrics(**{**STORE.as_dict(), **kw})

def test_current_state_reference_store():
    s = compute_current_state(STORE)
    assert s.cvr == 2.5
    assert s.orders == pytest.approx(1250)
    assert s.revenue == pytest.approx(100000)
    assert s.roas == pytest.approx(10)
    assert s.cpa == pytest.approx(8)
    assert s.rps == pytest.approx(2)

def test_expected_scenario_lifts_cvr_25pct():
    s = compute_improved_state(STORE, "expected")
    assert s.cvr == pytest.approx(3.125)
    assert s.orders == pytest.approx(1562.5)
    assert s.revenue == pytest.approx(125000)
    assert s.roas == pytest.approx(12.5)
    assert s.cpa == pytest.approx(6.4)

@pytest.mark.parametrize("scenario,cvr,revenue", [
    ("conservative", 2.875, 115000),
    ("expected", 3.125, 125000),
    ("optimistic", 3.5, 140000),
])
def test_each_scenario_multiplier(scenario, cvr, revenue):
    s = apply_scenario(STORE, scenario)
    assert s.cvr == pytest.approx(cvr)
    assert s.revenue == pytest.approx(revenue)

def test_enum_and_string_agree():
    assert compute_improved_state(STORE, Scenario.OPTIMISTIC) == compute_improved_state(STORE, "optimistic")

def test_unknown_scenario_fails_fast():
    with pytest.raises(ValueError):
        compute_improved_state(STORE, "aggressive")
    with pytest.raises(ValueError):
        scenario_multiplier("")

def test_zero_ad_spend_guards_roas_and_cpa():
    s = compute_current_state(_mk(ad_spend=0))
    assert s.roas == 0
    assert s.cpa == 0
    assert s.revenue == pytest.approx(100000)

def test_zero_visitors_guards_rps():
    s = compute_current_state(_mk(monthly_visitors=0))
    assert (s.orders, s.revenue, s.rps, s.roas) == (0, 0, 0, 0)

def test_zero_cvr_guards_cpa():
    s = compute_current_state(_mk(current_cvr=0))
    assert s.orders == 0
    assert s.cpa == 0

def test_multiplier_one_is_current_state():
    assert compute_state(STORE, 1.0) == compute_current_state(STORE)

@pytest.mark.parametrize("visitors,cvr,aov,spend", list(itertools.product(
    [0, 1000, 10_000_000], [0, 0.1, 15], [0, 10, 5000], [0, 100, 1_000_000]
)))
def test_outputs_finite_and_non_negative(visitors, cvr, aov, spend):
    m = InputMetrics(monthly_visitors=visitors, current_cvr=cvr, aov=aov, ad_spend=spend)
    for scenario in Scenario:
        for s in (compute_current_state(m), compute_improved_state(m, scenario)):
            for v in s.as_dict().values():
                assert math.isfinite(v) and v >= 0

def test_roas_independent_of_currency_unit():
    usd = compute_current_state(STORE)
    cop = compute_current_state(_mk(aov=80 * 4000, ad_spend=10000 * 4000))
    assert cop.roas == pytest.approx(usd.roas)
    assert cop.cpa == pytest.approx(usd.cpa * 4000)
    assert cop.orders == pytest.approx(usd.orders)

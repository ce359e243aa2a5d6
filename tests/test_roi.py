# tests/test_roi.py
import math
import pytest
from roicalc.models.metrics import InputMetrics, ProjectionDataPoint, QualificationTier
from roicalc.services.projections import generate_projection
from roicalc.services.roi import compute_roi, payback_month, qualification_tier, percent_change

def _series(improved, current=100000):
    out, c_cum, i_cum = [], 0.0, 0.0
    for m, imp in enumerate(improved, start=1):
        c_cum += current; i_cum += imp
        out.append(ProjectionDataPoint(m, current, imp, imp, c_cum, i_cum, i_cum))
    return out

MOCK = _series([106250, 115000, 125000, 126250, 127500, 128750])

def test_totals_and_multiple():
    r = compute_roi(3000, 6, 128750, MOCK)
    assert r.total_investment == 18000
    assert r.total_additional_revenue == 128750
    assert r.roi_multiple == pytest.approx(7.1528, abs=1e-4)
    assert r.roi_percent == pytest.approx(715.28, abs=1e-2)

def test_compute_roi_3000_for_6_months_recovers_18000():
    # 18000 to recover: 6250 after month 1, 21250 after month 2
    r = compute_roi(3000, 6, 128750, MOCK)
    assert r.payback_months == pytest.approx(1 + 11750 / 15000)
    assert r.payback_months == pytest.approx(1.78, abs=0.01)
    assert r.payback_months != pytest.approx(0.48, abs=0.01)

def test_payback_inside_first_month():
    assert compute_roi(500, 6, 128750, MOCK).payback_months == pytest.approx(0.48)
    assert payback_month(3000, MOCK) == pytest.approx(0.48)

def test_payback_on_exact_month_boundary():
    assert payback_month(6250, MOCK) == pytest.approx(1.0)

@pytest.mark.parametrize("extra", [0, 128750, -5000, 1e9])
def test_zero_investment_means_zero_roi(extra):
    r = compute_roi(0, 6, extra, MOCK)
    assert r.total_investment == 0
    assert r.roi_multiple == 0
    assert r.roi_percent == 0

def test_never_pays_back_on_flat_series():
    flat = _series([100000] * 6)
    r = compute_roi(3000, 6, 0, flat)
    assert math.isinf(r.payback_months)
    assert r.roi_multiple == 0

def test_never_pays_back_when_horizon_too_short():
    assert math.isinf(payback_month(10_000_000, MOCK))
    assert math.isinf(payback_month(1, []))

def test_negative_months_never_pay_back():
    assert math.isinf(payback_month(1000, _series([90000] * 6)))

def test_roi_multiple_independent_of_currency_unit():
    usd = InputMetrics(monthly_visitors=50000, current_cvr=2.5, aov=80, ad_spend=10000)
    cop = InputMetrics(monthly_visitors=50000, current_cvr=2.5, aov=80 * 4000, ad_spend=10000 * 4000)
    results = []
    for m, inv in ((usd, 4000), (cop, 4000 * 4000)):
        data = generate_projection(m, "expected", 50, 6)
        extra = sum(p.improved - p.current for p in data)
        results.append(compute_roi(inv, 6, extra, data))
    assert results[1].roi_multiple == pytest.approx(results[0].roi_multiple)
    assert results[1].payback_months == pytest.approx(results[0].payback_months)

def test_qualification_boundary():
    assert qualification_tier(79999) is QualificationTier.ONE_TIME
    assert qualification_tier(80000) is QualificationTier.RECURRING
    assert qualification_tier(250000).value == "recurring"
    assert qualification_tier(0).value == "oneTime"

def test_percent_change():
    assert percent_change(100, 150) == pytest.approx(50)
    assert percent_change(100, 80) == pytest.approx(-20)
    assert percent_change(0, 100) == 100
    assert percent_change(0, 0) == 0
    assert percent_change(0, -5) == 0

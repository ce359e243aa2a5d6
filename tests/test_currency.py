# tests/test_currency.py
import pytest
from roicalc.models.metrics import CalculatorInputs
from roicalc.services.calculator import run_calculator
from roicalc.services.currency import conversion_rate, convert_amount, convert_inputs, get_currency

def test_usd_is_base():
    assert get_currency("USD")["exchange_rate"] == 1
    assert get_currency(" cop ")["code"] == "COP"

def test_unknown_currency():
    with pytest.raises(KeyError):
        get_currency("EUR")

def test_conversions():
    assert convert_amount(80, "USD", "COP") == pytest.approx(320000)
    assert convert_amount(320000, "COP", "USD") == pytest.approx(80)
    assert convert_amount(320000, "COP", "MXN") == pytest.approx(1360)
    assert conversion_rate("BRL", "BRL") == 1

def test_convert_inputs_scales_money_only():
    src = CalculatorInputs()
    out = convert_inputs(src, "USD", "MXN")
    assert out.aov == pytest.approx(80 * 17)
    assert out.ad_spend == pytest.approx(10000 * 17)
    assert out.monthly_investment == pytest.approx(4000 * 17)
    assert (out.monthly_visitors, out.current_cvr, out.reinvestment_percent, out.projection_months) == \
           (src.monthly_visitors, src.current_cvr, src.reinvestment_percent, src.projection_months)

def test_ratios_survive_conversion():
    usd = run_calculator(CalculatorInputs())
    cop = run_calculator(convert_inputs(CalculatorInputs(), "USD", "COP"))
    assert cop.current_state.roas == pytest.approx(usd.current_state.roas)
    assert cop.scaled_state.roas == pytest.approx(usd.scaled_state.roas)
    assert cop.roi.roi_multiple == pytest.approx(usd.roi.roi_multiple)
    assert cop.roi.payback_months == pytest.approx(usd.roi.payback_months)
    assert cop.current_state.revenue == pytest.approx(usd.current_state.revenue * 4000)

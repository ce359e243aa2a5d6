# roicalc/services/currency.py
from dataclasses import replace
from typing import Any, Dict

from roicalc.config import CURRENCIES
from roicalc.models.metrics import CalculatorInputs

_BY_CODE: Dict[str, Dict[str, Any]] = {c["code"]: c for c in CURRENCIES}


def get_currency(code: str) -> Dict[str, Any]:
    key = (code or "").strip().upper()
    if key not in _BY_CODE:
        raise KeyError(f"Unknown currency: {code!r}")
    return _BY_CODE[key]


def conversion_rate(from_code: str, to_code: str) -> float:
    return get_currency(to_code)["exchange_rate"] / get_currency(from_code)["exchange_rate"]


def convert_amount(value: float, from_code: str, to_code: str) -> float:
    return value * conversion_rate(from_code, to_code)


def convert_inputs(inputs: CalculatorInputs, from_code: str, to_code: str) -> CalculatorInputs:
    """
    Re-express the monetary inputs (aov, ad spend, monthly investment) in another
    currency. Traffic, CVR, percentages and months carry no unit.
    """
    rate = conversion_rate(from_code, to_code)
    return replace(
        inputs,
        aov=inputs.aov * rate,
        ad_spend=inputs.ad_spend * rate,
        monthly_investment=inputs.monthly_investment * rate,
    )

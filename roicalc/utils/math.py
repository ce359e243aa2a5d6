# roicalc/utils/math.py
import math
from typing import Iterable, Optional


def safe_div(n: Optional[float], d: Optional[float]) -> float:
    """n / d, or 0.0 when either side is missing/zero or the result is not finite."""
    if n is None or d in (None, 0):
        return 0.0
    try:
        out = n / d
    except ZeroDivisionError:
        return 0.0
    return out if math.isfinite(out) else 0.0


def r2(x):
    return None if x is None else round(float(x), 2)


def r4(x):
    return None if x is None else round(float(x), 4)


def finite_or_none(x: Optional[float]) -> Optional[float]:
    """JSON has no Infinity/NaN; map them to None for the wire."""
    if x is None or not math.isfinite(x):
        return None
    return x


def all_finite(values: Iterable[float]) -> bool:
    return all(math.isfinite(v) for v in values)

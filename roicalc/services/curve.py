from roicalc.config import IMPLEMENTATION_CURVE

_FULL_RAMP_MONTH = max(IMPLEMENTATION_CURVE)


def implementation_factor(month: int) -> float:
    """Share (0..1) of a CVR improvement that is live in `month` after launch."""
    if month <= 0:
        return 0.0
    if month >= _FULL_RAMP_MONTH:
        return 1.0
    return IMPLEMENTATION_CURVE.get(month, 1.0)

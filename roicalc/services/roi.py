# roicalc/services/roi.py
import math
from typing import Sequence

from roicalc.config import QUALIFICATION_THRESHOLD
from roicalc.models.metrics import ProjectionDataPoint, QualificationTier, ROIMetrics
from roicalc.utils.math import safe_div


def payback_month(total_investment: float, series: Sequence[ProjectionDataPoint]) -> float:
    """
    First (fractional) month where cumulative improved-minus-current revenue
    covers the whole investment. Walks the ramp-up curve rather than assuming
    a flat monthly average. Returns math.inf if the horizon never gets there.
    """
    accumulated = 0.0
    for i, point in enumerate(series):
        monthly = point.improved - point.current
        before = accumulated
        accumulated += monthly
        if accumulated >= total_investment:
            fraction = (total_investment - before) / monthly if monthly > 0 else 0.0
            return i + fraction
    return math.inf


def compute_roi(monthly_investment: float,
                months: int,
                total_additional_revenue: float,
                series: Sequence[ProjectionDataPoint]) -> ROIMetrics:
    total_investment = monthly_investment * months
    roi_multiple = safe_div(total_additional_revenue, total_investment) if total_investment > 0 else 0.0
    return ROIMetrics(
        total_investment=total_investment,
        total_additional_revenue=total_additional_revenue,
        roi_multiple=roi_multiple,
        roi_percent=roi_multiple * 100,
        payback_months=payback_month(total_investment, series),
    )


def qualification_tier(monthly_visitors: float) -> QualificationTier:
    if monthly_visitors >= QUALIFICATION_THRESHOLD:
        return QualificationTier.RECURRING
    return QualificationTier.ONE_TIME


def percent_change(original: float, updated: float) -> float:
    if original == 0:
        return 100.0 if updated > 0 else 0.0
    return (updated - original) / original * 100

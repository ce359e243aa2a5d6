# roicalc/services/projections.py
"""
Month-by-month revenue simulation.

Three tracks run side by side over the same months:
  current  - baseline store, nothing changes
  improved - CRO only: ramped scenario lift plus a linear ongoing lift after the ramp
  scaled   - ramped scenario lift (no ongoing lift) with part of the extra revenue
             reinvested in ad spend; traffic grows with sqrt(spend ratio) and the
             new traffic converts worse (ratio ** -CVR_DEGRADATION_FACTOR)

`simulate_scaled` and `generate_projection` read the same recurrence, so the
summary totals always agree with the last point of the series.
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Iterator, List, Union

from roicalc.config import CVR_DEGRADATION_FACTOR, MONTHLY_CVR_IMPROVEMENT
from roicalc.models.metrics import InputMetrics, ProjectionDataPoint, ScaledMetrics, Scenario
from roicalc.services.curve import implementation_factor
from roicalc.services.state import scenario_multiplier
from roicalc.utils.math import safe_div

log = logging.getLogger("roicalc")

_RAMP_MONTHS = 3


@dataclass(frozen=True)
class _MonthStep:
    month: int
    ramped_cvr: float          # scaled track CVR before degradation
    current_revenue: float
    improved_revenue: float
    scaled_orders: float
    scaled_revenue: float
    ad_spend: float            # spend actually used this month


def ongoing_improvement(month: int) -> float:
    """Linear post-ramp lift; never compounded."""
    if month <= _RAMP_MONTHS:
        return 0.0
    return MONTHLY_CVR_IMPROVEMENT * (month - _RAMP_MONTHS)


def _iter_months(metrics: InputMetrics,
                 scenario: Union[Scenario, str],
                 reinvestment_percent: float,
                 months: int) -> Iterator[_MonthStep]:
    multiplier = scenario_multiplier(scenario)
    visitors, cvr, aov, ad_spend = (
        metrics.monthly_visitors, metrics.current_cvr, metrics.aov, metrics.ad_spend
    )
    current_revenue = visitors * (cvr / 100) * aov
    current_ad_spend = ad_spend

    for month in range(1, months + 1):
        base_improvement = (multiplier - 1) * implementation_factor(month)
        ramped_cvr = cvr * (1 + base_improvement)
        improved_cvr = cvr * (1 + base_improvement + ongoing_improvement(month))
        improved_revenue = visitors * (improved_cvr / 100) * aov

        # spend -> traffic has diminishing returns; no baseline spend means no scaling
        spend_ratio = max(current_ad_spend / ad_spend, 0.0) if ad_spend > 0 else 1.0
        visitor_ratio = math.sqrt(spend_ratio)
        degradation = visitor_ratio ** -CVR_DEGRADATION_FACTOR if visitor_ratio > 0 else 1.0
        scaled_orders = visitors * visitor_ratio * (ramped_cvr * degradation / 100)
        scaled_revenue = scaled_orders * aov

        yield _MonthStep(
            month=month,
            ramped_cvr=ramped_cvr,
            current_revenue=current_revenue,
            improved_revenue=improved_revenue,
            scaled_orders=scaled_orders,
            scaled_revenue=scaled_revenue,
            ad_spend=current_ad_spend,
        )

        additional = scaled_revenue - current_revenue
        current_ad_spend += additional * (reinvestment_percent / 100)


def simulate_scaled(metrics: InputMetrics,
                    scenario: Union[Scenario, str],
                    reinvestment_percent: float,
                    months: int) -> ScaledMetrics:
    """
    Final-month state of the scaled track plus horizon totals.
      cvr/orders/revenue: last simulated month (cvr before scaling degradation)
      roas: total revenue / total ad spend over the horizon
      cpa:  last month's ad spend / last month's orders
      rps:  last month's revenue / baseline visitors
    """
    total_revenue = 0.0
    total_additional = 0.0
    total_ad_spent = 0.0
    last = None
    for step in _iter_months(metrics, scenario, reinvestment_percent, months):
        total_revenue += step.scaled_revenue
        total_additional += step.scaled_revenue - step.current_revenue
        total_ad_spent += step.ad_spend
        last = step

    if last is None:
        return ScaledMetrics(cvr=metrics.current_cvr, orders=0.0, revenue=0.0, roas=0.0, cpa=0.0, rps=0.0)

    log.debug("scaled sim: scenario=%s reinvest=%s months=%s total=%.2f",
              Scenario.coerce(scenario).value, reinvestment_percent, months, total_revenue)
    return ScaledMetrics(
        cvr=last.ramped_cvr,
        orders=last.scaled_orders,
        revenue=last.scaled_revenue,
        roas=safe_div(total_revenue, total_ad_spent),
        # spend that bought the final month, not the budget after its reinvestment
        cpa=safe_div(last.ad_spend, last.scaled_orders),
        rps=safe_div(last.scaled_revenue, metrics.monthly_visitors),
        total_revenue=total_revenue,
        total_additional_revenue=total_additional,
        total_ad_spent=total_ad_spent,
    )


def generate_projection(metrics: InputMetrics,
                        scenario: Union[Scenario, str],
                        reinvestment_percent: float,
                        months: int) -> List[ProjectionDataPoint]:
    """Per-month revenue for the three tracks with running totals (index 0 == month 1)."""
    out: List[ProjectionDataPoint] = []
    cur_cum = imp_cum = sc_cum = 0.0
    for step in _iter_months(metrics, scenario, reinvestment_percent, months):
        cur_cum += step.current_revenue
        imp_cum += step.improved_revenue
        sc_cum += step.scaled_revenue
        out.append(ProjectionDataPoint(
            month=step.month,
            current=step.current_revenue,
            improved=step.improved_revenue,
            scaled=step.scaled_revenue,
            current_cumulative=cur_cum,
            improved_cumulative=imp_cum,
            scaled_cumulative=sc_cum,
        ))
    return out

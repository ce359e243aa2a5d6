# roicalc/services/state.py
from typing import Union

from roicalc.config import SCENARIO_MULTIPLIERS
from roicalc.models.metrics import InputMetrics, Scenario, StateMetrics
from roicalc.utils.math import safe_div


def scenario_multiplier(scenario: Union[Scenario, str]) -> float:
    """CVR multiplier for a scenario. Unknown names raise ValueError."""
    return SCENARIO_MULTIPLIERS[Scenario.coerce(scenario).value]


def compute_state(metrics: InputMetrics, cvr_multiplier: float = 1.0) -> StateMetrics:
    """
    Point-in-time funnel metrics for one month of traffic.
      cvr     = current_cvr * multiplier        (percent)
      orders  = visitors * cvr / 100
      revenue = orders * aov
      roas    = revenue / ad_spend              (0 without spend)
      cpa     = ad_spend / orders               (0 without orders)
      rps     = revenue / visitors              (0 without traffic)
    """
    cvr = metrics.current_cvr * cvr_multiplier
    orders = metrics.monthly_visitors * (cvr / 100)
    revenue = orders * metrics.aov
    return StateMetrics(
        cvr=cvr,
        orders=orders,
        revenue=revenue,
        roas=safe_div(revenue, metrics.ad_spend) if metrics.ad_spend > 0 else 0.0,
        cpa=safe_div(metrics.ad_spend, orders) if orders > 0 else 0.0,
        rps=safe_div(revenue, metrics.monthly_visitors) if metrics.monthly_visitors > 0 else 0.0,
    )


def compute_current_state(metrics: InputMetrics) -> StateMetrics:
    return compute_state(metrics, 1.0)


def apply_scenario(metrics: InputMetrics, scenario: Union[Scenario, str]) -> StateMetrics:
    return compute_state(metrics, scenario_multiplier(scenario))


def compute_improved_state(metrics: InputMetrics, scenario: Union[Scenario, str]) -> StateMetrics:
    """State after the scenario's CVR lift is fully implemented."""
    return apply_scenario(metrics, scenario)

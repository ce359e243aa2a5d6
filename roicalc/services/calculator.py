# roicalc/services/calculator.py
import logging

from roicalc.models.metrics import CalculatorInputs, CalculatorState
from roicalc.services.projections import generate_projection, simulate_scaled
from roicalc.services.roi import compute_roi, percent_change, qualification_tier
from roicalc.services.state import compute_current_state, compute_improved_state
from roicalc.utils.math import all_finite

log = logging.getLogger("roicalc")


def run_calculator(inputs: CalculatorInputs) -> CalculatorState:
    """
    Compose every engine call for one set of inputs.

    ROI is measured on the CRO-only (improved) track so reinvestment effects are
    not credited to the optimisation fee; incremental revenue comes from the
    scaled track.
    """
    metrics = inputs.metrics
    months = inputs.projection_months

    current = compute_current_state(metrics)
    improved = compute_improved_state(metrics, inputs.scenario)
    scaled = simulate_scaled(metrics, inputs.scenario, inputs.reinvestment_percent, months)
    projection = generate_projection(metrics, inputs.scenario, inputs.reinvestment_percent, months)

    additional_with_curve = sum(p.improved - p.current for p in projection)
    roi = compute_roi(inputs.monthly_investment, months, additional_with_curve, projection)

    total_current = current.revenue * months
    total_improved = improved.revenue * months

    state = CalculatorState(
        inputs=inputs,
        current_state=current,
        improved_state=improved,
        scaled_state=scaled,
        projection=projection,
        roi=roi,
        qualification_tier=qualification_tier(metrics.monthly_visitors),
        additional_monthly_revenue=improved.revenue - current.revenue,
        total_current_revenue=total_current,
        total_improved_revenue=total_improved,
        incremental_revenue=scaled.total_revenue - total_current,
        changes={
            "revenue": percent_change(current.revenue, improved.revenue),
            "roas": percent_change(current.roas, improved.roas),
            "cpa": percent_change(current.cpa, improved.cpa),
        },
    )

    if not all_finite(scaled.as_dict().values()):
        log.warning("Non-finite scaled metrics for inputs=%r: %r", inputs, scaled.as_dict())
    return state

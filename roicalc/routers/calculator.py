import logging
from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException

from roicalc.config import (
    ALGO_VERSION, APP_VERSION, CURRENCIES, CVR_DEGRADATION_FACTOR, IMPLEMENTATION_CURVE,
    INPUT_RANGES, MONTHLY_CVR_IMPROVEMENT, QUALIFICATION_THRESHOLD, ROI_SANITY_MULTIPLE,
    SCENARIO_MULTIPLIERS,
)
from roicalc.models.io import CalculatorIn, CalculatorOut, ConvertIn, ProjectionPointOut
from roicalc.models.metrics import CalculatorState, ProjectionDataPoint, StateMetrics
from roicalc.services.calculator import run_calculator
from roicalc.services.currency import convert_inputs, get_currency
from roicalc.services.projections import generate_projection
from roicalc.utils.math import finite_or_none, r2, r4

log = logging.getLogger("roicalc.api")

router = APIRouter()


def _check_currency(code: str) -> Dict[str, Any]:
    try:
        return get_currency(code)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown currency: {code}")


def _state_block(s: StateMetrics) -> Dict[str, float]:
    return {"cvr": r4(s.cvr), "orders": r2(s.orders), "revenue": r2(s.revenue),
            "roas": r2(s.roas), "cpa": r2(s.cpa), "rps": r2(s.rps)}


def _point_block(p: ProjectionDataPoint) -> Dict[str, Any]:
    return {
        "month": p.month,
        "current": r2(p.current), "improved": r2(p.improved), "scaled": r2(p.scaled),
        "current_cumulative": r2(p.current_cumulative),
        "improved_cumulative": r2(p.improved_cumulative),
        "scaled_cumulative": r2(p.scaled_cumulative),
    }


def serialize_state(state: CalculatorState, currency: str) -> Dict[str, Any]:
    """Round for display and make the payload JSON-safe (no Infinity)."""
    roi = state.roi
    payback = finite_or_none(roi.payback_months)
    scaled = state.scaled_state
    return {
        "input": {**state.inputs.metrics.as_dict(),
                  "scenario": state.inputs.scenario.value,
                  "reinvestment_percent": state.inputs.reinvestment_percent,
                  "monthly_investment": state.inputs.monthly_investment,
                  "projection_months": state.inputs.projection_months,
                  "currency": currency},
        "current": _state_block(state.current_state),
        "improved": _state_block(state.improved_state),
        "scaled": _state_block(scaled) | {
            "total_revenue": r2(scaled.total_revenue),
            "total_additional_revenue": r2(scaled.total_additional_revenue),
            "total_ad_spent": r2(scaled.total_ad_spent),
        },
        "projection": [_point_block(p) for p in state.projection],
        "roi": {
            "total_investment": r2(roi.total_investment),
            "total_additional_revenue": r2(roi.total_additional_revenue),
            "roi_multiple": r2(roi.roi_multiple),
            "roi_percent": r2(roi.roi_percent),
            "payback_months": r2(payback),
            "pays_back": payback is not None,
            "reliable": roi.roi_multiple <= ROI_SANITY_MULTIPLE,
        },
        "qualification_tier": state.qualification_tier.value,
        "totals": {
            "additional_monthly_revenue": r2(state.additional_monthly_revenue),
            "total_current_revenue": r2(state.total_current_revenue),
            "total_improved_revenue": r2(state.total_improved_revenue),
            "incremental_revenue": r2(state.incremental_revenue),
        },
        "changes": {k: r2(v) for k, v in state.changes.items()},
        "meta": {"algo_version": ALGO_VERSION, "currency": currency},
    }


@router.get("/health")
def health():
    return {"ok": True}


@router.get("/meta")
def meta() -> Dict[str, Any]:
    return {
        "version": APP_VERSION,
        "algo_version": ALGO_VERSION,
        "constants": {
            "scenario_multipliers": dict(SCENARIO_MULTIPLIERS),
            "implementation_curve": dict(IMPLEMENTATION_CURVE),
            "cvr_degradation_factor": CVR_DEGRADATION_FACTOR,
            "monthly_cvr_improvement": MONTHLY_CVR_IMPROVEMENT,
            "qualification_threshold": QUALIFICATION_THRESHOLD,
            "roi_sanity_multiple": ROI_SANITY_MULTIPLE,
        },
        "input_ranges": dict(INPUT_RANGES),
    }


@router.get("/scenarios")
def scenarios() -> List[Dict[str, Any]]:
    return [
        {"id": k, "multiplier": m, "improvement_percent": r2((m - 1) * 100)}
        for k, m in SCENARIO_MULTIPLIERS.items()
    ]


@router.get("/currencies")
def currencies() -> List[Dict[str, Any]]:
    return [dict(c) for c in CURRENCIES]


@router.post("/calculate", response_model=CalculatorOut)
def calculate(req: CalculatorIn) -> Dict[str, Any]:
    currency = _check_currency(req.currency)["code"]
    state = run_calculator(req.to_inputs())
    if state.roi.roi_multiple > ROI_SANITY_MULTIPLE:
        log.info("ROI multiple %.1f above sanity threshold (currency=%s aov=%s)",
                 state.roi.roi_multiple, currency, req.aov)
    return serialize_state(state, currency)


@router.post("/projection", response_model=List[ProjectionPointOut])
def projection(req: CalculatorIn) -> List[Dict[str, Any]]:
    inputs = req.to_inputs()
    series = generate_projection(inputs.metrics, inputs.scenario,
                                 inputs.reinvestment_percent, inputs.projection_months)
    return [_point_block(p) for p in series]


@router.post("/convert", response_model=CalculatorIn)
def convert(req: ConvertIn) -> Dict[str, Any]:
    src = _check_currency(req.inputs.currency)["code"]
    dst = _check_currency(req.to_currency)["code"]
    converted = convert_inputs(req.inputs.to_inputs(), src, dst)
    return {
        **converted.metrics.as_dict(),
        "scenario": converted.scenario.value,
        "reinvestment_percent": converted.reinvestment_percent,
        "monthly_investment": converted.monthly_investment,
        "projection_months": converted.projection_months,
        "currency": dst,
    }

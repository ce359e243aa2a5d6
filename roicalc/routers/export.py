import logging
from io import BytesIO

from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse

from ..models.io import CalculatorIn
from ..services.calculator import run_calculator
from ..exporters.frames import projection_csv
from ..exporters.ppt import build_ppt
from .calculator import _check_currency

log = logging.getLogger("roicalc.export")

router = APIRouter()

@router.post("/export/csv")
def export_csv(req: CalculatorIn):
    _check_currency(req.currency)
    state = run_calculator(req.to_inputs())
    body = BytesIO(projection_csv(state.projection).encode("utf-8"))
    filename = f"projection_{req.scenario}_{req.projection_months}m.csv"
    return StreamingResponse(
        body,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )

@router.post("/export/pptx")
def export_pptx(req: CalculatorIn):
    _check_currency(req.currency)
    state = run_calculator(req.to_inputs())
    try:
        deck = build_ppt(state, title=f"CRO ROI – {req.scenario} scenario")
    except Exception:
        log.exception("Deck build failed for scenario=%s months=%s", req.scenario, req.projection_months)
        raise HTTPException(status_code=500, detail="Could not build presentation")
    filename = f"roi_{req.scenario}_{req.projection_months}m.pptx"
    return StreamingResponse(
        deck,
        media_type="application/vnd.openxmlformats-officedocument.presentationml.presentation",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )

import math
from io import BytesIO
from pptx import Presentation
from pptx.util import Inches, Pt

from roicalc.models.metrics import CalculatorState

_TABLE_HEADERS = ["Month", "Current", "CRO only", "CRO + reinvestment"]

def _money(x: float) -> str:
    return f"{x:,.0f}"

def _payback_text(months: float) -> str:
    if math.isinf(months):
        return "not within horizon"
    if months < 1:
        return "< 1 month"
    return f"{months:.1f} months"

def build_ppt(state: CalculatorState, title: str = "CRO ROI Projection") -> BytesIO:
    prs = Presentation()

    slide = prs.slides.add_slide(prs.slide_layouts[0])
    slide.shapes.title.text = title
    roi = state.roi
    slide.placeholders[1].text = (
        f"Scenario: {state.inputs.scenario.value} | "
        f"ROI: {roi.roi_multiple:.2f}x | Payback: {_payback_text(roi.payback_months)}"
    )

    table_slide = prs.slides.add_slide(prs.slide_layouts[5])
    table_slide.shapes.title.text = f"{state.inputs.projection_months}-month revenue projection"
    rows = len(state.projection) + 1
    table = table_slide.shapes.add_table(
        rows, len(_TABLE_HEADERS), Inches(0.5), Inches(1.5), Inches(9), Inches(0.3) * rows
    ).table
    for c, h in enumerate(_TABLE_HEADERS):
        table.cell(0, c).text = h
    for r, p in enumerate(state.projection, start=1):
        for c, v in enumerate([str(p.month), _money(p.current), _money(p.improved), _money(p.scaled)]):
            cell = table.cell(r, c)
            cell.text = v
            cell.text_frame.paragraphs[0].font.size = Pt(11)

    bio = BytesIO()
    prs.save(bio)
    bio.seek(0)
    return bio

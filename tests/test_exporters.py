# tests/test_exporters.py
import math
from dataclasses import replace
from pptx import Presentation

from roicalc.exporters.frames import COLUMNS, projection_frame, projection_csv
from roicalc.exporters.ppt import build_ppt
from roicalc.models.metrics import CalculatorInputs
from roicalc.services.calculator import run_calculator

def test_frame_shape_and_additional_column():
    st = run_calculator(CalculatorInputs(projection_months=9))
    df = projection_frame(st.projection)
    assert list(df.columns) == COLUMNS
    assert len(df) == 9
    assert (df["additional"] == df["improved"] - df["current"]).all()
    assert abs(df["improved_cumulative"].iloc[-1] - df["improved"].sum()) < 1e-6

def test_empty_series_keeps_schema():
    df = projection_frame([])
    assert df.empty and list(df.columns) == COLUMNS

def test_csv_is_rounded():
    csv = projection_csv(run_calculator(CalculatorInputs()).projection)
    first = csv.splitlines()[1].split(",")
    assert first[:3] == ["1", "100000.0", "106250.0"]

def test_deck_has_title_and_table():
    st = run_calculator(CalculatorInputs())
    prs = Presentation(build_ppt(st, title="Demo"))
    slides = list(prs.slides)
    assert slides[0].shapes.title.text == "Demo"
    table = next(s for s in slides[1].shapes if s.has_table).table
    assert len(table.rows) == 7
    assert table.cell(1, 0).text == "1"

def test_deck_handles_no_payback():
    st = run_calculator(CalculatorInputs(current_cvr=0))
    assert math.isinf(st.roi.payback_months)
    prs = Presentation(build_ppt(replace(st, projection=st.projection[:1])))
    assert "not within horizon" in list(prs.slides)[0].placeholders[1].text

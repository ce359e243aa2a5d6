from typing import Optional, Dict, Any, List, Literal
from pydantic import BaseModel, Field, conint, confloat

from roicalc.config import DEFAULT_INPUTS, DEFAULT_CURRENCY
from roicalc.models.metrics import CalculatorInputs, Scenario

ScenarioName = Literal["conservative", "expected", "optimistic"]
TierName = Literal["recurring", "oneTime"]

class CalculatorIn(BaseModel):
    monthly_visitors: confloat(ge=0)
    current_cvr: confloat(ge=0, le=100)          # percent
    aov: confloat(ge=0)
    ad_spend: confloat(ge=0)
    scenario: ScenarioName = DEFAULT_INPUTS["scenario"]
    reinvestment_percent: confloat(ge=0, le=100) = DEFAULT_INPUTS["reinvestment_percent"]
    monthly_investment: confloat(ge=0) = DEFAULT_INPUTS["monthly_investment"]
    projection_months: conint(ge=1, le=120) = DEFAULT_INPUTS["projection_months"]
    currency: str = Field(DEFAULT_CURRENCY, min_length=3, max_length=3)

    def to_inputs(self) -> CalculatorInputs:
        return CalculatorInputs(
            monthly_visitors=self.monthly_visitors,
            current_cvr=self.current_cvr,
            aov=self.aov,
            ad_spend=self.ad_spend,
            scenario=Scenario(self.scenario),
            reinvestment_percent=self.reinvestment_percent,
            monthly_investment=self.monthly_investment,
            projection_months=self.projection_months,
        )

class ConvertIn(BaseModel):
    inputs: CalculatorIn
    to_currency: str = Field(..., min_length=3, max_length=3)

class StateOut(BaseModel):
    cvr: float
    orders: float
    revenue: float
    roas: float
    cpa: float
    rps: float

class ScaledOut(StateOut):
    total_revenue: float
    total_additional_revenue: float
    total_ad_spent: float

class ProjectionPointOut(BaseModel):
    month: int
    current: float
    improved: float
    scaled: float
    current_cumulative: float
    improved_cumulative: float
    scaled_cumulative: float

class RoiOut(BaseModel):
    total_investment: float
    total_additional_revenue: float
    roi_multiple: float
    roi_percent: float
    payback_months: Optional[float] = None   # null == does not pay back within the horizon
    pays_back: bool
    reliable: bool = True                    # False when the multiple looks like a unit mix-up

class CalculatorOut(BaseModel):
    input: Dict[str, Any]
    current: StateOut
    improved: StateOut
    scaled: ScaledOut
    projection: List[ProjectionPointOut]
    roi: RoiOut
    qualification_tier: TierName
    totals: Dict[str, float]
    changes: Dict[str, float]
    meta: Dict[str, Any]

from __future__ import annotations
from dataclasses import dataclass, asdict, field
from enum import Enum
from typing import Any, Dict, List, Union

from roicalc.config import DEFAULT_INPUTS


class Scenario(str, Enum):
    CONSERVATIVE = "conservative"
    EXPECTED = "expected"
    OPTIMISTIC = "optimistic"

    @classmethod
    def coerce(cls, value: Union["Scenario", str]) -> "Scenario":
        """Accept the enum or its wire value; anything else is a caller bug."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(
                f"Unknown scenario {value!r}; expected one of {[s.value for s in cls]}"
            ) from None


class QualificationTier(str, Enum):
    RECURRING = "recurring"    # ongoing CRO retainer
    ONE_TIME = "oneTime"       # one-off high-conversion store build


@dataclass(frozen=True)
class InputMetrics:
    monthly_visitors: float
    current_cvr: float         # percent, 2.5 == 2.5%
    aov: float
    ad_spend: float

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class StateMetrics:
    cvr: float
    orders: float
    revenue: float
    roas: float
    cpa: float
    rps: float

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ScaledMetrics(StateMetrics):
    """Final simulated month plus totals over the whole horizon."""
    total_revenue: float = 0.0
    total_additional_revenue: float = 0.0
    total_ad_spent: float = 0.0


@dataclass(frozen=True)
class ProjectionDataPoint:
    month: int                 # 1-indexed
    current: float
    improved: float
    scaled: float
    current_cumulative: float
    improved_cumulative: float
    scaled_cumulative: float

    @property
    def additional(self) -> float:
        return self.improved - self.current

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ROIMetrics:
    total_investment: float
    total_additional_revenue: float
    roi_multiple: float
    roi_percent: float
    payback_months: float      # math.inf when the horizon never covers the investment

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CalculatorInputs:
    monthly_visitors: float = DEFAULT_INPUTS["monthly_visitors"]
    current_cvr: float = DEFAULT_INPUTS["current_cvr"]
    aov: float = DEFAULT_INPUTS["aov"]
    ad_spend: float = DEFAULT_INPUTS["ad_spend"]
    scenario: Scenario = Scenario(DEFAULT_INPUTS["scenario"])
    reinvestment_percent: float = DEFAULT_INPUTS["reinvestment_percent"]
    monthly_investment: float = DEFAULT_INPUTS["monthly_investment"]
    projection_months: int = DEFAULT_INPUTS["projection_months"]

    def __post_init__(self):
        object.__setattr__(self, "scenario", Scenario.coerce(self.scenario))

    @property
    def metrics(self) -> InputMetrics:
        return InputMetrics(
            monthly_visitors=self.monthly_visitors,
            current_cvr=self.current_cvr,
            aov=self.aov,
            ad_spend=self.ad_spend,
        )


@dataclass(frozen=True)
class CalculatorState:
    inputs: CalculatorInputs
    current_state: StateMetrics
    improved_state: StateMetrics
    scaled_state: ScaledMetrics
    projection: List[ProjectionDataPoint]
    roi: ROIMetrics
    qualification_tier: QualificationTier
    additional_monthly_revenue: float
    total_current_revenue: float
    total_improved_revenue: float
    incremental_revenue: float
    changes: Dict[str, float] = field(default_factory=dict)

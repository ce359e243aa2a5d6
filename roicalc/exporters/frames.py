from typing import Sequence

import pandas as pd

from roicalc.models.metrics import ProjectionDataPoint

COLUMNS = [
    "month", "current", "improved", "scaled", "additional",
    "current_cumulative", "improved_cumulative", "scaled_cumulative",
]


def projection_frame(series: Sequence[ProjectionDataPoint]) -> pd.DataFrame:
    """One row per simulated month; `additional` is the CRO-only gain over baseline."""
    df = pd.DataFrame([p.as_dict() for p in series])
    if df.empty:
        return pd.DataFrame(columns=COLUMNS)
    df["additional"] = df["improved"] - df["current"]
    return df[COLUMNS]


def projection_csv(series: Sequence[ProjectionDataPoint]) -> str:
    return projection_frame(series).round(2).to_csv(index=False)

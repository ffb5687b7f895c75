# vehweight/summary.py
"""
Reshape the per-year aggregate for the report:
- summarize(): vehicles and overall share per weight class, plus a Total row
- share_matrix(): model_year x weight_class shares for a 100%-stacked area chart
"""

from __future__ import annotations
import numpy as np
import pandas as pd

from .weight_classes import LABELS

TOTAL_LABEL = "Total"


def summarize(agg: pd.DataFrame) -> pd.DataFrame:
    vehicles = (
        agg.assign(weight_class=agg["weight_class"].astype(str))
        .groupby("weight_class")["vehicle_count"]
        .sum()
        .reindex(LABELS, fill_value=0)
        .astype("int64")
    )
    grand = int(vehicles.sum())
    share = vehicles / grand if grand > 0 else pd.Series(0.0, index=vehicles.index)
    out = pd.DataFrame({
        "weight_class": LABELS,
        "vehicles": vehicles.to_numpy(),
        "share": share.to_numpy(dtype=float),
    })
    total = pd.DataFrame([{
        "weight_class": TOTAL_LABEL,
        "vehicles": grand,
        "share": 1.0 if grand > 0 else 0.0,
    }])
    return pd.concat([out, total], ignore_index=True)


def share_matrix(agg: pd.DataFrame) -> pd.DataFrame:
    if agg.empty:
        return pd.DataFrame(columns=LABELS, dtype=np.float64).rename_axis("model_year")
    wide = (
        agg.assign(weight_class=agg["weight_class"].astype(str))
        .pivot_table(index="model_year", columns="weight_class", values="share", aggfunc="sum")
        .reindex(columns=LABELS)
        .fillna(0.0)
        .sort_index()
    )
    wide.columns.name = None
    return wide.astype(np.float64)

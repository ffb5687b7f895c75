# vehweight/aggregate.py
"""
Turn raw registration rows into per-model-year weight-class shares.

Input rows carry model_year, unladen_weight and vin (usually as strings).
Output is a tidy frame with one row per (model_year, weight_class), every
year padded to all weight classes:
  model_year (int64), weight_class (ordered categorical),
  vehicle_count (int64), year_total (int64), share (float64)
"""

from __future__ import annotations
import logging
from typing import Any, Iterable, Mapping, Union

import numpy as np
import pandas as pd

from .settings import COLUMNS
from .weight_classes import LABELS, bin_edges, categorical_dtype

log = logging.getLogger(__name__)

OUTPUT_COLUMNS = ["model_year", "weight_class", "vehicle_count", "year_total", "share"]

MIN_MODEL_YEAR = 1000
MAX_MODEL_YEAR = 9999

Records = Union[pd.DataFrame, Iterable[Mapping[str, Any]]]


def _to_frame(records: Records) -> pd.DataFrame:
    if isinstance(records, pd.DataFrame):
        df = records.copy()
    else:
        df = pd.DataFrame.from_records(list(records))
    for c in COLUMNS:
        if c not in df.columns:
            df[c] = pd.NA
    return df[list(COLUMNS)]


def _coerce(df: pd.DataFrame) -> pd.DataFrame:
    year = pd.to_numeric(df["model_year"], errors="coerce").astype("float64")
    # non-finite, fractional or implausible years are treated as unparseable
    year = year.where(
        np.isfinite(year) & (year == np.floor(year)) & year.between(MIN_MODEL_YEAR, MAX_MODEL_YEAR)
    )
    weight = pd.to_numeric(df["unladen_weight"], errors="coerce").astype("float64")
    vin = df["vin"].astype("string").str.strip()
    vin = vin.mask(vin.fillna("") == "")
    return pd.DataFrame({"model_year": year, "unladen_weight": weight, "vin": vin}, index=df.index)


def clean(records: Records) -> pd.DataFrame:
    """Coerce types, drop incomplete or non-positive-weight rows, keep the first row per VIN.

    "First" is input order, so dedup is only as stable as the order the rows
    were fetched in.
    """
    df = _coerce(_to_frame(records))
    n_raw = len(df)
    df = df.dropna(subset=["model_year", "unladen_weight", "vin"])
    df = df[df["unladen_weight"] > 0]
    n_valid = len(df)
    df = df.drop_duplicates(subset="vin", keep="first").copy()
    df["model_year"] = df["model_year"].astype("int64")
    log.info(
        "cleaned %d -> %d rows (%d invalid, %d duplicate VINs)",
        n_raw, len(df), n_raw - n_valid, n_valid - len(df),
    )
    return df.reset_index(drop=True)


def assign_weight_class(df: pd.DataFrame) -> pd.DataFrame:
    out = df.copy()
    out["weight_class"] = pd.cut(
        out["unladen_weight"], bins=bin_edges(), right=False, labels=LABELS
    ).astype(categorical_dtype())
    outside = out["weight_class"].isna()
    if outside.any():
        log.warning("dropping %d rows outside every weight class", int(outside.sum()))
    return out[~outside].reset_index(drop=True)


def _empty() -> pd.DataFrame:
    return pd.DataFrame({
        "model_year": pd.Series(dtype="int64"),
        "weight_class": pd.Series(dtype=categorical_dtype()),
        "vehicle_count": pd.Series(dtype="int64"),
        "year_total": pd.Series(dtype="int64"),
        "share": pd.Series(dtype="float64"),
    })


def aggregate(records: Records) -> pd.DataFrame:
    return aggregate_cleaned(clean(records))


def aggregate_cleaned(cleaned: pd.DataFrame) -> pd.DataFrame:
    """Bin and aggregate rows already passed through clean()."""
    binned = assign_weight_class(cleaned)
    if binned.empty:
        return _empty()

    counts = (
        binned.assign(weight_class=binned["weight_class"].astype(str))
        .groupby(["model_year", "weight_class"])
        .size()
        .rename("vehicle_count")
    )

    # pad every year to the full set of classes
    years = sorted(binned["model_year"].unique())
    grid = pd.MultiIndex.from_product([years, LABELS], names=["model_year", "weight_class"])
    out = counts.reindex(grid, fill_value=0).reset_index()

    out["model_year"] = out["model_year"].astype("int64")
    out["weight_class"] = out["weight_class"].astype(categorical_dtype())
    out["vehicle_count"] = out["vehicle_count"].astype("int64")
    out["year_total"] = out.groupby("model_year")["vehicle_count"].transform("sum").astype("int64")
    total = out["year_total"].to_numpy()
    out["share"] = np.where(total > 0, out["vehicle_count"] / np.where(total > 0, total, 1), 0.0)

    out = out.sort_values(["model_year", "weight_class"]).reset_index(drop=True)
    return out[OUTPUT_COLUMNS]

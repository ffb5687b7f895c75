# vehweight/weight_classes.py
"""
Ordered unladen-weight classes (lbs). Binning, sort order and chart colours
are all derived from WEIGHT_CLASSES below.

Bins are half-open [lower, upper); the last class has no upper bound.
"""

from __future__ import annotations
import math
from typing import Dict, List, NamedTuple, Optional

import pandas as pd


class WeightClass(NamedTuple):
    label: str
    lower: float
    upper: float
    color: str


WEIGHT_CLASSES: tuple[WeightClass, ...] = (
    WeightClass("<2750",     0,    2750,     "#440154"),
    WeightClass("2750-3000", 2750, 3000,     "#472D7B"),
    WeightClass("3000-3500", 3000, 3500,     "#3B528B"),
    WeightClass("3500-4000", 3500, 4000,     "#2C728E"),
    WeightClass("4000-4500", 4000, 4500,     "#21918C"),
    WeightClass("4500-5000", 4500, 5000,     "#28AE80"),
    WeightClass("5000-5500", 5000, 5500,     "#5EC962"),
    WeightClass("5500-6000", 5500, 6000,     "#ADDC30"),
    WeightClass("≥6000",     6000, math.inf, "#FDE725"),
)

LABELS: List[str] = [wc.label for wc in WEIGHT_CLASSES]


def bin_edges() -> List[float]:
    return [wc.lower for wc in WEIGHT_CLASSES] + [WEIGHT_CLASSES[-1].upper]


def categorical_dtype() -> pd.CategoricalDtype:
    return pd.CategoricalDtype(categories=LABELS, ordered=True)


def classify(weight: float) -> Optional[WeightClass]:
    """Return the class containing a single ``weight``, or None when it falls outside every bin.

    Scalar counterpart of the frame binning in aggregate.assign_weight_class.
    """
    if weight is None or pd.isna(weight):
        return None
    for wc in WEIGHT_CLASSES:
        if wc.lower <= weight < wc.upper:
            return wc
    return None


def color_map() -> Dict[str, str]:
    return {wc.label: wc.color for wc in WEIGHT_CLASSES}

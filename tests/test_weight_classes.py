import math

from vehweight.weight_classes import (
    LABELS, WEIGHT_CLASSES, bin_edges, categorical_dtype, classify, color_map,
)


def test_nine_contiguous_classes():
    assert len(WEIGHT_CLASSES) == 9
    for a, b in zip(WEIGHT_CLASSES, WEIGHT_CLASSES[1:]):
        assert a.upper == b.lower
    assert bin_edges()[0] == 0 and math.isinf(bin_edges()[-1])


def test_classify_boundaries():
    assert classify(2750).label == "2750-3000"
    assert classify(2749.5).label == "<2750"
    assert classify(6000).label == "≥6000"
    assert classify(0).label == "<2750"
    assert classify(-1) is None
    assert classify(float("nan")) is None


def test_derived_views_follow_table_order():
    assert list(categorical_dtype().categories) == LABELS
    assert categorical_dtype().ordered
    assert list(color_map()) == LABELS
    assert len(set(color_map().values())) == 9

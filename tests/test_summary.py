from vehweight.aggregate import aggregate
from vehweight.summary import share_matrix, summarize
from vehweight.weight_classes import LABELS


RECORDS = [
    {"model_year": 2019, "unladen_weight": 2600, "vin": "A"},
    {"model_year": 2019, "unladen_weight": 3600, "vin": "B"},
    {"model_year": 2020, "unladen_weight": 3700, "vin": "C"},
    {"model_year": 2020, "unladen_weight": 6600, "vin": "D"},
]


def test_summary_totals():
    s = summarize(aggregate(RECORDS))
    assert s["weight_class"].tolist() == LABELS + ["Total"]
    body, total = s.iloc[:-1], s.iloc[-1]
    assert total["vehicles"] == 4 == body["vehicles"].sum()
    assert abs(body["share"].sum() - 1.0) < 1e-9
    assert total["share"] == 1.0
    row = s.set_index("weight_class").loc["3500-4000"]
    assert row["vehicles"] == 2 and row["share"] == 0.5


def test_summary_of_empty_aggregate():
    s = summarize(aggregate([]))
    assert s["vehicles"].sum() == 0
    assert (s["share"] == 0).all()


def test_share_matrix_layout():
    m = share_matrix(aggregate(RECORDS))
    assert list(m.columns) == LABELS
    assert m.index.tolist() == [2019, 2020]
    assert m.loc[2020, "≥6000"] == 0.5
    assert ((m.sum(axis=1) - 1.0).abs() < 1e-9).all()
    assert list(share_matrix(aggregate([])).columns) == LABELS

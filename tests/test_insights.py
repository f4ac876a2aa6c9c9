"""
Packing insights tests — efficiency ratings, warnings, weight / cost breakdown.
"""

import pytest

from packaging_app.calculators import compute
from packaging_app.calculators.insights import InsightsCalculator, build_insights
from packaging_app.schemas import ProductData


def _data(**overrides):
    fields = {
        "product_width": 100,
        "product_length": 150,
        "product_height": 50,
        "product_weight": 0.5,
        "product_cost": 12.50,
        "box_width": 300,
        "box_length": 450,
        "box_height": 150,
        "box_weight": 0.1,
        "box_cost": 1.20,
        "pallet_width": 1200,
        "pallet_length": 800,
        "production_speed": 100,
        "working_days": 5,
    }
    fields.update(overrides)
    return ProductData(**fields)


def _no_box(**overrides):
    fields = {"box_width": None, "box_length": None, "box_height": None,
              "box_weight": None, "box_cost": None}
    fields.update(overrides)
    return _data(**fields)


def _analysis(data):
    return build_insights(data, compute(data))


def _codes(analysis):
    return [i["code"] for i in analysis["insights"]]


@pytest.mark.parametrize("percentage,rating", [
    (100.0, "excellent"),
    (80.0, "excellent"),
    (79.9, "good"),
    (60.0, "good"),
    (59.9, "poor"),
    (0.0, "poor"),
])
def test_efficiency_rating(percentage, rating):
    assert InsightsCalculator().efficiency_rating(percentage) == rating


def test_reference_ratings_and_warnings():
    analysis = _analysis(_data())
    assert analysis["pallet_rating"] == "poor"       # 56.25%
    assert analysis["box_rating"] == "excellent"     # 100%
    assert _codes(analysis) == ["low_pallet_utilization"]
    assert analysis["insights"][0]["message"].startswith("Low pallet utilization")
    assert analysis["insights"][0]["level"] == "warning"


def test_loose_box_warns_about_box_utilization():
    analysis = _analysis(_data(box_width=290, box_length=440, box_height=140))
    assert _codes(analysis) == ["low_pallet_utilization", "low_box_utilization"]


def test_no_box_never_warns_about_box_utilization():
    analysis = _analysis(_no_box(product_width=250))
    assert "low_box_utilization" not in _codes(analysis)


def test_excellent_efficiency():
    analysis = _analysis(_no_box())
    assert analysis["pallet_rating"] == "excellent"  # 93.75%
    assert _codes(analysis) == ["excellent_efficiency"]
    assert analysis["insights"][0]["level"] == "success"


def test_single_layer_warning():
    analysis = _analysis(_data(pallet_max_height=200))
    assert "single_layer" in _codes(analysis)


def test_breakdown():
    breakdown = _analysis(_data())["breakdown"]
    assert breakdown["product_weight_per_box"] == pytest.approx(13.5)
    assert breakdown["packaging_weight_per_box"] == pytest.approx(0.1)
    assert breakdown["product_cost_per_box"] == pytest.approx(337.5)
    assert breakdown["packaging_cost_per_box"] == pytest.approx(1.2)
    assert breakdown["total_weight_tonnes"] == pytest.approx(0.6528)
    assert breakdown["average_weight_per_pallet"] == pytest.approx(652.8)
    assert breakdown["weight_per_unit"] == pytest.approx(652.8 / 1296)
    assert breakdown["product_weight_share"] == pytest.approx(0.5 / 0.6 * 100)
    assert breakdown["packaging_cost_share"] == pytest.approx(1.2 / 338.7 * 100)
    assert breakdown["total_units"] == 1296


def test_breakdown_shares_are_none_without_weight_or_cost():
    breakdown = _analysis(_no_box(product_weight=0, product_cost=0))["breakdown"]
    assert breakdown["product_weight_share"] is None
    assert breakdown["packaging_cost_share"] is None
    assert breakdown["weight_per_unit"] == 0

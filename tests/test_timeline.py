"""
Production timeline tests.

Reference order: 1296 units at 500 units/day, 5-day weeks, 4.2 estimated
days, started on Monday 2026-03-02.
"""

from datetime import date

import pytest

from packaging_app.calculators import InvalidInputError, compute
from packaging_app.calculators.timeline import TimelineCalculator, project_timeline
from packaging_app.schemas import ProductData

START = date(2026, 3, 2)


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


def _timeline(**overrides):
    data = _data(**overrides)
    return project_timeline(data, compute(data), start_date=START)


def test_completion_date_rounds_estimate_up():
    timeline = _timeline()
    assert timeline["estimated_days"] == pytest.approx(4.2)
    assert timeline["calendar_days"] == 5
    assert timeline["estimated_completion_date"] == date(2026, 3, 7)
    assert timeline["working_days_needed"] == 3.6
    assert timeline["total_units_needed"] == 1296


def test_start_date_defaults_to_today():
    data = _data()
    timeline = project_timeline(data, compute(data))
    assert timeline["start_date"] == date.today()


def test_phases():
    phases = _timeline()["phases"]
    assert [p["name"] for p in phases] == [
        "Production Setup", "Production Phase 1", "Production Phase 2", "Final Production & QC",
    ]
    assert [p["duration"] for p in phases] == [1, 2, 2, 1]
    assert [p["percentage"] for p in phases] == [5, 40, 40, 15]
    assert [p["units"] for p in phases] == [0, 518, 518, 260]
    assert sum(p["units"] for p in phases) == 1296


def test_phase_dates_are_consecutive():
    phases = _timeline()["phases"]
    assert [(p["start_date"], p["end_date"]) for p in phases] == [
        (date(2026, 3, 2), date(2026, 3, 2)),
        (date(2026, 3, 3), date(2026, 3, 4)),
        (date(2026, 3, 5), date(2026, 3, 6)),
        (date(2026, 3, 7), date(2026, 3, 7)),
    ]


def test_milestones_cap_at_total_units():
    milestones = _timeline()["milestones"]
    assert [m["day"] for m in milestones] == [1, 2, 3, 4, 5]
    assert [m["cumulative_units"] for m in milestones] == [500, 1000, 1296, 1296, 1296]
    assert milestones[-1]["progress_percentage"] == pytest.approx(100.0)
    assert milestones[0]["pallet_progress"] == pytest.approx(500 / 1296)
    assert all(m["is_working_day"] for m in milestones)


def test_milestones_cover_first_week_only():
    milestones = _timeline(target_products=3000)["milestones"]
    assert len(milestones) == 7
    assert [m["is_working_day"] for m in milestones] == [True] * 5 + [False] * 2
    assert milestones[-1]["cumulative_units"] == 3500
    assert milestones[-1]["date"] == date(2026, 3, 8)


def test_capacity_analysis():
    capacity = _timeline()["capacity"]
    assert capacity["required_daily_units"] == 363      # ceil(1296 / (5 * 5 / 7))
    assert capacity["capacity_utilization"] == pytest.approx(72.6)
    assert capacity["spare_daily_units"] == 137


def test_speed_scenarios():
    scenarios = _timeline()["scenarios"]
    assert [s["speed_factor"] for s in scenarios] == [1.2, 1.0, 0.8]
    assert [s["daily_units"] for s in scenarios] == [600, 500, 400]
    assert [s["days"] for s in scenarios] == [4, 5, 5]


# ============================================================
# Deadline
# ============================================================

def test_no_deadline():
    assert _timeline()["deadline"] is None


def test_deadline_conflict():
    deadline = _timeline(deadline=date(2026, 3, 5))["deadline"]
    assert deadline["conflict"] is True
    assert deadline["days_to_deadline"] == 3
    assert deadline["days_margin"] == -2
    assert deadline["recommended_speed"] == 605    # ceil(1296 / 3 * 7 / 5)
    assert deadline["message"] == "Production will complete 2 days after the deadline"


def test_deadline_met():
    deadline = _timeline(deadline=date(2026, 3, 20))["deadline"]
    assert deadline["conflict"] is False
    assert deadline["days_margin"] == 13
    assert deadline["recommended_speed"] is None
    assert deadline["message"] == "Production will complete 18 days before the deadline"


def test_deadline_on_completion_day_is_not_a_conflict():
    deadline = _timeline(deadline=date(2026, 3, 7))["deadline"]
    assert deadline["conflict"] is False
    assert deadline["days_margin"] == 0


def test_deadline_on_start_day_uses_one_day():
    deadline = _timeline(deadline=START)["deadline"]
    assert deadline["conflict"] is True
    assert deadline["recommended_speed"] == 1815   # ceil(1296 * 7 / 5)


# ============================================================
# Degenerate results
# ============================================================

def test_container_larger_than_pallet_raises():
    data = _data(box_width=None, box_length=None, box_height=None, product_width=1300)
    with pytest.raises(InvalidInputError) as exc_info:
        TimelineCalculator().calculate(data, compute(data), start_date=START)
    assert exc_info.value.fields == ["palletWidth"]

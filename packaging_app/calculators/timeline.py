"""
Production timeline projection.

Turns the engine's estimatedDays into calendar dates: completion date,
deadline check, production phases, first-week milestones, capacity and
speed scenarios.
"""

import math
from datetime import date, timedelta

from ..schemas import CalculationResults, ProductData
from .base import BaseCalculator
from .validation import InvalidInputError, check_fits


class TimelineCalculator(BaseCalculator):

    # (name, share of estimated days, progress %, share of units)
    # The last phase takes the units left after floor(total * 0.8).
    PHASES = [
        ("Production Setup", None, 5, 0.0),
        ("Production Phase 1", 0.4, 40, 0.4),
        ("Production Phase 2", 0.4, 40, 0.4),
        ("Final Production & QC", 0.2, 15, None),
    ]
    MILESTONE_DAYS = 7
    SPEED_SCENARIOS = [1.2, 1.0, 0.8]

    def calculate(self, data: ProductData, results: CalculationResults,
                  start_date: date = None) -> dict:
        errors = check_fits(results)
        if errors:
            raise InvalidInputError(errors)

        start = start_date or date.today()
        calendar_days = math.ceil(results.estimated_days)
        completion = start + timedelta(days=calendar_days)
        total_units = results.total_pallets_needed * results.total_units_per_pallet

        return {
            "start_date": start,
            "estimated_days": results.estimated_days,
            "calendar_days": calendar_days,
            "working_days_needed": round(calendar_days / 7 * data.working_days, 1),
            "estimated_completion_date": completion,
            "total_units_needed": total_units,
            "deadline": self.deadline_status(data, results, start, completion, total_units),
            "phases": self.build_phases(results, start, total_units),
            "milestones": self.build_milestones(data, results, start, total_units),
            "capacity": self.capacity_analysis(data, results, total_units),
            "scenarios": self.speed_scenarios(data, results, total_units),
        }

    def deadline_status(self, data: ProductData, results: CalculationResults,
                        start: date, completion: date, total_units: int):
        """None when no deadline is set."""
        if not data.deadline:
            return None

        days_to_deadline = (data.deadline - start).days
        margin = (data.deadline - completion).days
        conflict = margin < 0

        status = {
            "deadline": data.deadline,
            "days_to_deadline": days_to_deadline,
            "days_margin": margin,
            "conflict": conflict,
            "recommended_speed": None,
        }
        if conflict:
            status["message"] = f"Production will complete {abs(margin)} days after the deadline"
            # Same units, squeezed into the days left before the deadline
            status["recommended_speed"] = math.ceil(
                (total_units / (days_to_deadline or 1)) * 7 / data.working_days
            )
        else:
            status["message"] = f"Production will complete {days_to_deadline} days before the deadline"
        return status

    def build_phases(self, results: CalculationResults, start: date, total_units: int) -> list:
        phases = []
        start_day = 1
        covered_share = sum(s for _, _, _, s in self.PHASES if s)
        for name, day_share, percentage, unit_share in self.PHASES:
            if day_share is None:
                duration = 1
            else:
                duration = math.ceil(results.estimated_days * day_share)

            if unit_share is None:
                units = total_units - math.floor(total_units * covered_share)
            else:
                units = math.floor(total_units * unit_share)

            end_day = start_day + duration - 1
            phases.append({
                "name": name,
                "duration": duration,
                "percentage": percentage,
                "units": units,
                "start_date": start + timedelta(days=start_day - 1),
                "end_date": start + timedelta(days=end_day - 1),
            })
            start_day += duration
        return phases

    def build_milestones(self, data: ProductData, results: CalculationResults,
                         start: date, total_units: int) -> list:
        milestones = []
        days = min(self.MILESTONE_DAYS, math.ceil(results.estimated_days))
        for i in range(days):
            day = i + 1
            cumulative = min(day * results.daily_production, total_units)
            milestones.append({
                "day": day,
                "date": start + timedelta(days=i),
                "cumulative_units": cumulative,
                "progress_percentage": self.percentage(cumulative, total_units),
                "pallet_progress": self.divide(cumulative, results.total_units_per_pallet),
                "is_working_day": (i % 7) < data.working_days,
            })
        return milestones

    def capacity_analysis(self, data: ProductData, results: CalculationResults,
                          total_units: int) -> dict:
        working_days = math.ceil(results.estimated_days) * data.working_days / 7
        required_daily = self.ceil(self.divide(total_units, working_days))
        return {
            "required_daily_units": required_daily,
            "capacity_utilization": self.percentage(required_daily, results.daily_production),
            "spare_daily_units": results.daily_production - required_daily,
        }

    def speed_scenarios(self, data: ProductData, results: CalculationResults,
                        total_units: int) -> list:
        scenarios = []
        for factor in self.SPEED_SCENARIOS:
            speed = results.daily_production * factor
            if factor == 1.0:
                days = math.ceil(results.estimated_days)
            else:
                days = math.ceil(total_units / (speed * data.working_days / 7))
            scenarios.append({
                "speed_factor": factor,
                "daily_units": round(speed),
                "days": days,
            })
        return scenarios


def project_timeline(data: ProductData, results: CalculationResults,
                     start_date: date = None) -> dict:
    return TimelineCalculator().calculate(data, results, start_date=start_date)

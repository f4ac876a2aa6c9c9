"""
Packing insights — efficiency ratings, optimization warnings and the
weight / cost breakdown shown next to the results.
"""

from ..schemas import CalculationResults, ProductData
from .base import BaseCalculator


class InsightsCalculator(BaseCalculator):

    EXCELLENT_THRESHOLD = 80.0
    GOOD_THRESHOLD = 60.0
    LOW_PALLET_UTILIZATION = 80.0
    LOW_BOX_UTILIZATION = 70.0

    def calculate(self, data: ProductData, results: CalculationResults) -> dict:
        return {
            "pallet_rating": self.efficiency_rating(results.pallet_utilization),
            "box_rating": self.efficiency_rating(results.box_utilization),
            "insights": self.build_insights(data, results),
            "breakdown": self.build_breakdown(data, results),
        }

    def efficiency_rating(self, percentage: float) -> str:
        if percentage >= self.EXCELLENT_THRESHOLD:
            return "excellent"
        if percentage >= self.GOOD_THRESHOLD:
            return "good"
        return "poor"

    def build_insights(self, data: ProductData, results: CalculationResults) -> list:
        insights = []

        if results.pallet_utilization < self.LOW_PALLET_UTILIZATION:
            insights.append(self._insight(
                "low_pallet_utilization", "warning",
                "Low pallet utilization (%.1f%%): consider adjusting box dimensions "
                "or product arrangement to better fill the pallet space." % results.pallet_utilization,
            ))

        if results.box_utilization < self.LOW_BOX_UTILIZATION and data.has_box:
            insights.append(self._insight(
                "low_box_utilization", "warning",
                "Low box utilization (%.1f%%): the box is too large for the products. "
                "Consider smaller box dimensions." % results.box_utilization,
            ))

        if (results.pallet_utilization >= self.EXCELLENT_THRESHOLD
                and results.box_utilization >= self.EXCELLENT_THRESHOLD):
            insights.append(self._insight(
                "excellent_efficiency", "success",
                "Excellent packing efficiency: the configuration makes optimal use of space.",
            ))

        if results.layers_per_pallet == 1:
            insights.append(self._insight(
                "single_layer", "warning",
                "Single layer stacking: more layers may fit if the product can support "
                "additional weight.",
            ))

        return insights

    def build_breakdown(self, data: ProductData, results: CalculationResults) -> dict:
        box_weight = data.box_weight or 0
        box_cost = data.box_cost or 0
        total_units = results.total_pallets_needed * results.total_units_per_pallet
        return {
            "product_weight_per_box": data.product_weight * results.units_per_box,
            "packaging_weight_per_box": box_weight,
            "product_cost_per_box": data.product_cost * results.units_per_box,
            "packaging_cost_per_box": box_cost,
            "total_weight_tonnes": results.total_weight / 1000,
            "average_weight_per_pallet": self.divide(results.total_weight, results.total_pallets_needed),
            "weight_per_unit": self.divide(results.total_weight, total_units),
            "product_weight_share": self._share(data.product_weight, data.product_weight + box_weight),
            "packaging_cost_share": self._share(box_cost, results.cost_per_box),
            "total_units": total_units,
        }

    def _share(self, part: float, whole: float):
        """Percentage, or None when there is nothing to divide."""
        if not whole:
            return None
        return self.percentage(part, whole)

    def _insight(self, code: str, level: str, message: str) -> dict:
        return {"code": code, "level": level, "message": message}


def build_insights(data: ProductData, results: CalculationResults) -> dict:
    return InsightsCalculator().calculate(data, results)

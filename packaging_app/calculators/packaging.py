"""
Packaging calculator — units per box, boxes per layer, layers per pallet.

Axis-aligned grid packing only: no rotation, no mixed orientation. Space
left over on any axis is wasted and only shows up in the utilization ratios.
"""

import logging
import math

from ..schemas import CalculationOutcome, CalculationResults, ProductData
from .base import BaseCalculator
from .validation import InvalidInputError, check_fits, validate_product_data

logger = logging.getLogger(__name__)


class PackagingCalculator(BaseCalculator):

    def calculate(self, data: ProductData) -> CalculationResults:
        """Validate, then compute. Raises InvalidInputError listing every bad field."""
        errors = validate_product_data(data)
        if errors:
            raise InvalidInputError(errors)

        results = self.calculate_unchecked(data)
        # A demand target divided by a zero count (nothing fits) gives inf/nan
        if not self._all_finite(results):
            errors = check_fits(results)
            logger.info("Rejected packaging input, nothing fits: %s", ", ".join(e.field for e in errors))
            raise InvalidInputError(errors)
        return results

    def _all_finite(self, results: CalculationResults) -> bool:
        return all(math.isfinite(value) for value in results.model_dump().values())

    def calculate_unchecked(self, data: ProductData) -> CalculationResults:
        """
        The raw arithmetic with no validation.

        Never raises: a zero denominator produces inf/nan that propagates
        through every downstream field.
        """
        # 1. Container: the box if fully defined, otherwise the product itself
        if data.has_box:
            container_width = data.box_width
            container_length = data.box_length
            container_height = data.box_height
        else:
            container_width = data.product_width
            container_length = data.product_length
            container_height = data.product_height

        # 2. Units per box
        units_per_box = 1
        if data.has_box:
            units_per_box = (
                self.fit_count(data.box_width, data.product_width)
                * self.fit_count(data.box_length, data.product_length)
                * self.fit_count(data.box_height, data.product_height)
            )

        # 3. Containers per pallet layer
        boxes_per_pallet_layer = (
            self.fit_count(data.pallet_width, container_width)
            * self.fit_count(data.pallet_length, container_length)
        )

        # 4. Layers per pallet
        max_height = data.pallet_max_height or self.DEFAULT_PALLET_MAX_HEIGHT
        layers_per_pallet = self.fit_count(max_height, container_height)

        # 5. Units per pallet
        total_units_per_pallet = units_per_box * boxes_per_pallet_layer * layers_per_pallet

        # 6. Demand: targetPallets wins over targetProducts; neither means one pallet
        total_pallets_needed = 1
        total_boxes_needed = boxes_per_pallet_layer * layers_per_pallet
        if data.target_pallets:
            total_pallets_needed = data.target_pallets
            total_boxes_needed = total_pallets_needed * boxes_per_pallet_layer * layers_per_pallet
        elif data.target_products:
            total_pallets_needed = self.ceil(self.divide(data.target_products, total_units_per_pallet))
            total_boxes_needed = self.ceil(self.divide(data.target_products, units_per_box))

        # 7. Weight rollup
        weight_per_box = data.product_weight * units_per_box + (data.box_weight or 0)
        weight_per_pallet_layer = weight_per_box * boxes_per_pallet_layer
        weight_per_pallet = weight_per_pallet_layer * layers_per_pallet
        total_weight = weight_per_pallet * total_pallets_needed

        # 8. Cost rollup
        cost_per_box = data.product_cost * units_per_box + (data.box_cost or 0)
        cost_per_pallet_layer = cost_per_box * boxes_per_pallet_layer
        cost_per_pallet = cost_per_pallet_layer * layers_per_pallet
        total_cost = cost_per_pallet * total_pallets_needed

        # 9. Timeline: working-day count spread over a 7-day week
        total_units_needed = total_pallets_needed * total_units_per_pallet
        daily_production = data.production_speed * data.working_days
        estimated_days = self.divide(
            self.ceil(self.divide(total_units_needed, daily_production)) * 7,
            data.working_days,
        )

        # 10. Utilization: footprint for the pallet, volume for the box
        pallet_area = data.pallet_width * data.pallet_length
        used_area = boxes_per_pallet_layer * container_width * container_length
        pallet_utilization = self.percentage(used_area, pallet_area)

        box_volume = self.volume(container_width, container_length, container_height)
        product_volume = self.volume(data.product_width, data.product_length, data.product_height)
        box_utilization = self.percentage(units_per_box * product_volume, box_volume)

        return CalculationResults(
            units_per_box=units_per_box,
            boxes_per_pallet_layer=boxes_per_pallet_layer,
            layers_per_pallet=layers_per_pallet,
            total_units_per_pallet=total_units_per_pallet,
            total_boxes_needed=total_boxes_needed,
            total_pallets_needed=total_pallets_needed,
            weight_per_box=weight_per_box,
            weight_per_pallet_layer=weight_per_pallet_layer,
            weight_per_pallet=weight_per_pallet,
            total_weight=total_weight,
            cost_per_box=cost_per_box,
            cost_per_pallet_layer=cost_per_pallet_layer,
            cost_per_pallet=cost_per_pallet,
            total_cost=total_cost,
            estimated_days=estimated_days,
            daily_production=daily_production,
            pallet_utilization=pallet_utilization,
            box_utilization=box_utilization,
        )


_calculator = PackagingCalculator()


def compute(data: ProductData) -> CalculationResults:
    """ProductData -> CalculationResults. Raises InvalidInputError on bad input."""
    return _calculator.calculate(data)


def calculate_unchecked(data: ProductData) -> CalculationResults:
    return _calculator.calculate_unchecked(data)


def try_compute(data: ProductData) -> CalculationOutcome:
    """Tagged-result form of compute() — never raises for invalid input."""
    try:
        results = _calculator.calculate(data)
    except InvalidInputError as e:
        return CalculationOutcome(ok=False, errors=e.errors)
    return CalculationOutcome(ok=True, results=results)

"""
Truck load plan — how many pallets fit on a standard truck bed.

Same grid fill as the pallet layer: pallets are placed axis-aligned, one
level high, with no rotation.
"""

import logging

from ..schemas import CalculationResults, FieldError, ProductData
from .base import BaseCalculator
from .validation import InvalidInputError, check_fits

logger = logging.getLogger(__name__)


class TruckLoadCalculator(BaseCalculator):

    TRUCK_WIDTH = 2400.0   # mm
    TRUCK_LENGTH = 6000.0  # mm

    def __init__(self, truck_width: float = None, truck_length: float = None):
        self.truck_width = truck_width or self.TRUCK_WIDTH
        self.truck_length = truck_length or self.TRUCK_LENGTH

    def calculate(self, data: ProductData, results: CalculationResults) -> dict:
        errors = check_fits(results)
        if errors:
            raise InvalidInputError(errors)

        pallets_across = self.fit_count(self.truck_width, data.pallet_width)
        pallets_along = self.fit_count(self.truck_length, data.pallet_length)
        pallets_per_truck = pallets_across * pallets_along
        if pallets_per_truck == 0:
            raise InvalidInputError([
                FieldError(field=name, message="pallet does not fit on the truck bed")
                for name, size, limit in (
                    ("palletWidth", data.pallet_width, self.truck_width),
                    ("palletLength", data.pallet_length, self.truck_length),
                )
                if size > limit
            ])

        pallets_loaded = min(results.total_pallets_needed, pallets_per_truck)
        trucks_needed = self.ceil(self.divide(results.total_pallets_needed, pallets_per_truck))
        pallet_area = data.pallet_width * data.pallet_length

        logger.debug("Truck plan: %d x %d pallets, %s trucks", pallets_across, pallets_along, trucks_needed)

        return {
            "truck_width": self.truck_width,
            "truck_length": self.truck_length,
            "pallets_across": pallets_across,
            "pallets_along": pallets_along,
            "pallets_per_truck": pallets_per_truck,
            "pallets_loaded": pallets_loaded,
            "truck_utilization": self.percentage(pallets_loaded, pallets_per_truck),
            "floor_utilization": self.percentage(
                pallets_loaded * pallet_area, self.truck_width * self.truck_length
            ),
            "trucks_needed": trucks_needed,
            "load_weight": pallets_loaded * results.weight_per_pallet,
        }


def plan_truck_load(data: ProductData, results: CalculationResults,
                    truck_width: float = None, truck_length: float = None) -> dict:
    return TruckLoadCalculator(truck_width, truck_length).calculate(data, results)

"""
Upfront validation for ProductData.

Every violated constraint is collected before anything is computed, so the
caller can show all field problems at once.
"""

import logging
import math

from ..schemas import FieldError, ProductData

logger = logging.getLogger(__name__)

# (attribute, camelCase name): mandatory, strictly positive
POSITIVE_FIELDS = [
    ("product_width", "productWidth"),
    ("product_length", "productLength"),
    ("product_height", "productHeight"),
    ("pallet_width", "palletWidth"),
    ("pallet_length", "palletLength"),
    ("production_speed", "productionSpeed"),
]

# Mandatory, zero allowed
NON_NEGATIVE_FIELDS = [
    ("product_weight", "productWeight"),
    ("product_cost", "productCost"),
]

# Optional: checked only when given
OPTIONAL_POSITIVE_FIELDS = [
    ("box_width", "boxWidth"),
    ("box_length", "boxLength"),
    ("box_height", "boxHeight"),
    ("pallet_max_height", "palletMaxHeight"),
]

OPTIONAL_NON_NEGATIVE_FIELDS = [
    ("box_weight", "boxWeight"),
    ("box_cost", "boxCost"),
    ("target_pallets", "targetPallets"),
    ("target_products", "targetProducts"),
]

BOX_FIELDS = ("box_width", "box_length", "box_height")

MIN_WORKING_DAYS = 1
MAX_WORKING_DAYS = 7


class InvalidInputError(ValueError):
    """ProductData violates one or more field constraints."""

    def __init__(self, errors: list):
        self.errors = list(errors)
        fields = ", ".join(e.field for e in self.errors)
        super().__init__(f"Invalid packaging input: {fields}")

    @property
    def fields(self) -> list:
        return [e.field for e in self.errors]

    def to_detail(self) -> dict:
        """Payload for an HTTP 422 response."""
        return {
            "message": str(self),
            "errors": [e.model_dump() for e in self.errors],
        }


def _check_finite(value, name: str, errors: list) -> bool:
    if isinstance(value, float) and not math.isfinite(value):
        errors.append(FieldError(field=name, message="must be a finite number"))
        return False
    return True


def validate_product_data(data: ProductData) -> list:
    """Returns every FieldError for `data`. Empty list means valid."""
    errors = []

    for attr, name in POSITIVE_FIELDS:
        value = getattr(data, attr)
        if _check_finite(value, name, errors) and value <= 0:
            errors.append(FieldError(field=name, message="must be greater than 0"))

    for attr, name in NON_NEGATIVE_FIELDS:
        value = getattr(data, attr)
        if _check_finite(value, name, errors) and value < 0:
            errors.append(FieldError(field=name, message="must be 0 or greater"))

    for attr, name in OPTIONAL_POSITIVE_FIELDS:
        value = getattr(data, attr)
        if value is None:
            continue
        if _check_finite(value, name, errors) and value <= 0:
            errors.append(FieldError(field=name, message="must be greater than 0 when given"))

    for attr, name in OPTIONAL_NON_NEGATIVE_FIELDS:
        value = getattr(data, attr)
        if value is None:
            continue
        if _check_finite(value, name, errors) and value < 0:
            errors.append(FieldError(field=name, message="must be 0 or greater"))

    # A partial box is ambiguous: either the box or the bare product is the container
    given = [attr for attr in BOX_FIELDS if getattr(data, attr) is not None]
    if 0 < len(given) < len(BOX_FIELDS):
        for attr, name in OPTIONAL_POSITIVE_FIELDS[:3]:
            if getattr(data, attr) is None:
                errors.append(FieldError(
                    field=name,
                    message="boxWidth, boxLength and boxHeight must be given together",
                ))

    if not MIN_WORKING_DAYS <= data.working_days <= MAX_WORKING_DAYS:
        errors.append(FieldError(
            field="workingDays",
            message=f"must be between {MIN_WORKING_DAYS} and {MAX_WORKING_DAYS}",
        ))

    if errors:
        logger.info("Rejected packaging input: %s", ", ".join(e.field for e in errors))
    return errors


def check_fits(results) -> list:
    """
    FieldErrors for valid input that packs nothing — a product larger than
    its box, or a container larger than the pallet. The engine reports these
    as zero counts; projections built on the results cannot use them.
    """
    errors = []
    if results.units_per_box == 0:
        errors.append(FieldError(field="boxWidth", message="product does not fit inside the box"))
    if results.boxes_per_pallet_layer == 0:
        errors.append(FieldError(field="palletWidth", message="container footprint is larger than the pallet"))
    if results.layers_per_pallet == 0:
        errors.append(FieldError(field="palletMaxHeight", message="container is taller than the pallet height limit"))
    return errors

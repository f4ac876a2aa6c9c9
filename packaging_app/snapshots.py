"""
Conversions between saved configuration rows and engine value types.

The row stores ProductData and CalculationResults as flat snake_case
columns with the same names as the model attributes.
"""

from . import models, schemas
from .config import settings


def row_to_product_data(row: models.PackagingConfiguration) -> schemas.ProductData:
    return schemas.ProductData(**{col: getattr(row, col) for col in models.INPUT_COLUMNS})


def row_to_results(row: models.PackagingConfiguration) -> schemas.CalculationResults:
    return schemas.CalculationResults(**{col: getattr(row, col) for col in models.RESULT_COLUMNS})


def apply_snapshot(row: models.PackagingConfiguration,
                   data: schemas.ProductData,
                   results: schemas.CalculationResults) -> None:
    """Copy inputs and results onto the row (in place, caller commits)."""
    for col in models.INPUT_COLUMNS:
        setattr(row, col, getattr(data, col))
    for col in models.RESULT_COLUMNS:
        setattr(row, col, getattr(results, col))


def row_to_configuration(row: models.PackagingConfiguration) -> schemas.Configuration:
    return schemas.Configuration(
        id=row.id,
        product_id=row.product_id,
        user_id=row.user_id,
        configuration_name=row.configuration_name,
        notes=row.notes,
        data=row_to_product_data(row),
        results=row_to_results(row),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def default_product_data(product: models.Product) -> schemas.ProductData:
    """Starting input for a product with no saved configuration."""
    return schemas.ProductData(
        product_width=0,
        product_length=0,
        product_height=0,
        pallet_width=settings.DEFAULT_PALLET_WIDTH,
        pallet_length=settings.DEFAULT_PALLET_LENGTH,
        product_weight=0,
        product_cost=product.base_price or 0,
        production_speed=settings.DEFAULT_PRODUCTION_SPEED,
        working_days=settings.DEFAULT_WORKING_DAYS,
    )

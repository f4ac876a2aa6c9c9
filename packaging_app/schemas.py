from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Optional, List, Union
from datetime import date, datetime

# Counts are ints for valid input; the unchecked engine path may yield inf/nan
Count = Union[int, float]


class ProductData(BaseModel):
    """
    Engine input. Dimensions in mm, weights in kg, costs in currency units.

    Immutable — derive a changed copy with model_copy(update={...}).
    JSON uses camelCase (productWidth, ...); attributes are snake_case.
    """
    # Product dimensions (mandatory)
    product_width: float
    product_length: float
    product_height: float

    # Box dimensions (optional, all three or none)
    box_width: Optional[float] = None
    box_length: Optional[float] = None
    box_height: Optional[float] = None

    # Pallet dimensions
    pallet_width: float
    pallet_length: float
    pallet_max_height: Optional[float] = None

    # Weight data
    product_weight: float
    box_weight: Optional[float] = None

    # Cost data
    product_cost: float
    box_cost: Optional[float] = None

    # Order details
    target_pallets: Optional[int] = None
    target_products: Optional[int] = None
    production_speed: float  # units per working day
    working_days: int  # working days per week
    deadline: Optional[date] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        frozen = True

    @property
    def has_box(self) -> bool:
        """True when all three box dimensions are given."""
        return bool(self.box_width and self.box_length and self.box_height)


class CalculationResults(BaseModel):
    """Engine output — 18 derived figures, field names fixed for consumers."""
    units_per_box: Count
    boxes_per_pallet_layer: Count
    layers_per_pallet: Count
    total_units_per_pallet: Count
    total_boxes_needed: Count
    total_pallets_needed: Count

    # Weight calculations (kg)
    weight_per_box: float
    weight_per_pallet_layer: float
    weight_per_pallet: float
    total_weight: float

    # Cost calculations
    cost_per_box: float
    cost_per_pallet_layer: float
    cost_per_pallet: float
    total_cost: float

    # Timeline
    estimated_days: float
    daily_production: float

    # Efficiency metrics (%)
    pallet_utilization: float
    box_utilization: float

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        frozen = True


class FieldError(BaseModel):
    field: str
    message: str


class CalculationOutcome(BaseModel):
    """Tagged result — either results or the full list of field errors."""
    ok: bool
    results: Optional[CalculationResults] = None
    errors: List[FieldError] = []


# --- Product catalog ---

class ProductBase(BaseModel):
    sku: str
    name: str
    description: Optional[str] = None
    unit_of_measure: Optional[str] = None
    base_price: float = 0.0
    barcode: Optional[str] = None

class ProductCreate(ProductBase):
    pass

class ProductUpdate(BaseModel):
    sku: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    unit_of_measure: Optional[str] = None
    base_price: Optional[float] = None
    barcode: Optional[str] = None

class Product(ProductBase):
    product_id: int
    created_at: datetime
    updated_at: datetime
    class Config:
        from_attributes = True

class ProductListItem(Product):
    has_configuration: bool = False


# --- Saved configurations ---

class ConfigurationSave(BaseModel):
    product_id: int
    user_id: Optional[str] = None
    configuration_name: str
    notes: Optional[str] = None
    data: ProductData

class Configuration(BaseModel):
    id: int
    product_id: int
    user_id: Optional[str] = None
    configuration_name: str
    notes: Optional[str] = None
    data: ProductData
    results: CalculationResults
    created_at: datetime
    updated_at: datetime

class ConfigurationSeed(BaseModel):
    """Engine input to start from when a product is selected."""
    product_id: int
    configuration_id: Optional[int] = None
    from_saved: bool
    data: ProductData


# --- Nutrition facts ---

class NutritionFactsBase(BaseModel):
    label_name: str
    serving_size: Optional[str] = None
    serving_size_metric: Optional[str] = None
    servings_per_container: Optional[str] = None
    calories: Optional[float] = None

    total_fat_g: Optional[float] = None
    total_fat_dv: Optional[float] = None
    saturated_fat_g: Optional[float] = None
    saturated_fat_dv: Optional[float] = None
    trans_fat_g: Optional[float] = None

    cholesterol_mg: Optional[float] = None
    cholesterol_dv: Optional[float] = None
    sodium_mg: Optional[float] = None
    sodium_dv: Optional[float] = None
    total_carbohydrate_g: Optional[float] = None
    total_carbohydrate_dv: Optional[float] = None
    dietary_fiber_g: Optional[float] = None
    dietary_fiber_dv: Optional[float] = None
    total_sugars_g: Optional[float] = None
    added_sugars_g: Optional[float] = None
    added_sugars_dv: Optional[float] = None
    protein_g: Optional[float] = None

    vitamin_d_mcg: Optional[float] = None
    vitamin_d_dv: Optional[float] = None
    calcium_mg: Optional[float] = None
    calcium_dv: Optional[float] = None
    iron_mg: Optional[float] = None
    iron_dv: Optional[float] = None
    potassium_mg: Optional[float] = None
    potassium_dv: Optional[float] = None

    is_bilingual: bool = False
    language_primary: str = "en"
    language_secondary: Optional[str] = None

class NutritionFactsCreate(NutritionFactsBase):
    product_id: Optional[int] = None
    user_id: Optional[str] = None

class NutritionFacts(NutritionFactsCreate):
    id: int
    created_at: datetime
    updated_at: datetime
    class Config:
        from_attributes = True


# --- Sticker labels ---

class StickerLabelBase(BaseModel):
    label_name: str
    label_size: str = "4x4"
    company_logo_url: Optional[str] = None
    made_in_mexico_logo_url: Optional[str] = None
    elaborated_by: Optional[str] = None
    distributed_by: Optional[str] = None
    product_name_override: Optional[str] = None
    product_flavor_override: Optional[str] = None
    product_flavor_image_override: Optional[str] = None
    product_color_dark_override: Optional[str] = None
    product_color_light_override: Optional[str] = None
    product_net_weight_override: Optional[str] = None
    ingredients: Optional[str] = None
    how_to_serve_instructions: Optional[str] = None
    barcode_image_url: Optional[str] = None
    qr_code_url: Optional[str] = None
    language_setting: int = 0
    nutrition_facts_id: Optional[int] = None
    layout_config: Optional[dict] = None

class StickerLabelSave(StickerLabelBase):
    product_id: int
    user_id: Optional[str] = None

class StickerLabel(StickerLabelBase):
    id: int
    product_id: int
    user_id: str
    created_at: datetime
    updated_at: datetime
    class Config:
        from_attributes = True

class StickerLabelSeed(BaseModel):
    """Label content to start from when a product is selected."""
    product_id: int
    label_id: Optional[int] = None
    from_saved: bool
    label: StickerLabelBase

from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, Date, Text, JSON, ForeignKey, UniqueConstraint, Index, text
from sqlalchemy.orm import relationship
from datetime import datetime
from .database import Base

# user_id stored for sticker labels saved without a caller id
ANONYMOUS_USER = "anonymous"


class Product(Base):
    """Catalog entry — supplies the default unit cost for a configuration."""
    __tablename__ = "products"

    product_id = Column(Integer, primary_key=True, index=True)
    sku = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    unit_of_measure = Column(String, nullable=True)
    base_price = Column(Float, default=0.0)
    barcode = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    configurations = relationship(
        "PackagingConfiguration", back_populates="product", cascade="all, delete-orphan"
    )
    nutrition_facts = relationship("NutritionFacts", back_populates="product")
    sticker_labels = relationship(
        "StickerLabel", back_populates="product", cascade="all, delete-orphan"
    )


class PackagingConfiguration(Base):
    """Saved ProductData + CalculationResults pair, one per (product, user)."""
    __tablename__ = "packaging_configurations"
    __table_args__ = (
        UniqueConstraint("product_id", "user_id", name="uq_configuration_product_user"),
        # NULLs are distinct in the constraint above, so anonymous saves need their own index
        Index(
            "uq_configuration_product_anonymous", "product_id", unique=True,
            sqlite_where=text("user_id IS NULL"), postgresql_where=text("user_id IS NULL"),
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.product_id"), nullable=False)
    user_id = Column(String, nullable=True)  # Opaque caller id, never verified
    configuration_name = Column(String, nullable=False)
    notes = Column(Text, nullable=True)

    # Product dimensions (mm, kg)
    product_width = Column(Float, nullable=False)
    product_length = Column(Float, nullable=False)
    product_height = Column(Float, nullable=False)
    product_weight = Column(Float, nullable=False)
    product_cost = Column(Float, nullable=False)

    # Box dimensions (optional)
    box_width = Column(Float, nullable=True)
    box_length = Column(Float, nullable=True)
    box_height = Column(Float, nullable=True)
    box_weight = Column(Float, nullable=True)
    box_cost = Column(Float, nullable=True)

    # Pallet dimensions
    pallet_width = Column(Float, nullable=False)
    pallet_length = Column(Float, nullable=False)
    pallet_max_height = Column(Float, nullable=True)

    # Order details
    target_pallets = Column(Integer, nullable=True)
    target_products = Column(Integer, nullable=True)
    production_speed = Column(Float, nullable=False)
    working_days = Column(Integer, nullable=False)
    deadline = Column(Date, nullable=True)

    # Calculated results
    units_per_box = Column(Integer)
    boxes_per_pallet_layer = Column(Integer)
    layers_per_pallet = Column(Integer)
    total_units_per_pallet = Column(Integer)
    total_boxes_needed = Column(Integer)
    total_pallets_needed = Column(Integer)

    weight_per_box = Column(Float)
    weight_per_pallet_layer = Column(Float)
    weight_per_pallet = Column(Float)
    total_weight = Column(Float)

    cost_per_box = Column(Float)
    cost_per_pallet_layer = Column(Float)
    cost_per_pallet = Column(Float)
    total_cost = Column(Float)

    estimated_days = Column(Float)
    daily_production = Column(Float)

    pallet_utilization = Column(Float)
    box_utilization = Column(Float)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    product = relationship("Product", back_populates="configurations")


class NutritionFacts(Base):
    """Nutrition facts panel for a product. Several panels per product are allowed."""
    __tablename__ = "nutrition_facts"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.product_id"), nullable=True)
    user_id = Column(String, nullable=True)
    label_name = Column(String, nullable=False)

    # Serving
    serving_size = Column(String, nullable=True)
    serving_size_metric = Column(String, nullable=True)
    servings_per_container = Column(String, nullable=True)
    calories = Column(Float, nullable=True)

    # Fats (g, % daily value)
    total_fat_g = Column(Float, nullable=True)
    total_fat_dv = Column(Float, nullable=True)
    saturated_fat_g = Column(Float, nullable=True)
    saturated_fat_dv = Column(Float, nullable=True)
    trans_fat_g = Column(Float, nullable=True)

    # Other nutrients
    cholesterol_mg = Column(Float, nullable=True)
    cholesterol_dv = Column(Float, nullable=True)
    sodium_mg = Column(Float, nullable=True)
    sodium_dv = Column(Float, nullable=True)
    total_carbohydrate_g = Column(Float, nullable=True)
    total_carbohydrate_dv = Column(Float, nullable=True)
    dietary_fiber_g = Column(Float, nullable=True)
    dietary_fiber_dv = Column(Float, nullable=True)
    total_sugars_g = Column(Float, nullable=True)
    added_sugars_g = Column(Float, nullable=True)
    added_sugars_dv = Column(Float, nullable=True)
    protein_g = Column(Float, nullable=True)

    # Vitamins and minerals
    vitamin_d_mcg = Column(Float, nullable=True)
    vitamin_d_dv = Column(Float, nullable=True)
    calcium_mg = Column(Float, nullable=True)
    calcium_dv = Column(Float, nullable=True)
    iron_mg = Column(Float, nullable=True)
    iron_dv = Column(Float, nullable=True)
    potassium_mg = Column(Float, nullable=True)
    potassium_dv = Column(Float, nullable=True)

    # Bilingual panels
    is_bilingual = Column(Boolean, default=False)
    language_primary = Column(String, default="en")
    language_secondary = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    product = relationship("Product", back_populates="nutrition_facts")


class StickerLabel(Base):
    """Sticker label content for a product, one per (user, product)."""
    __tablename__ = "sticker_labels"
    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_sticker_label_user_product"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, default=ANONYMOUS_USER)
    product_id = Column(Integer, ForeignKey("products.product_id"), nullable=False)
    nutrition_facts_id = Column(Integer, ForeignKey("nutrition_facts.id"), nullable=True)

    label_name = Column(String, nullable=False)
    label_size = Column(String, default="4x4")
    company_logo_url = Column(String, nullable=True)
    made_in_mexico_logo_url = Column(String, nullable=True)
    elaborated_by = Column(Text, nullable=True)
    distributed_by = Column(Text, nullable=True)

    # Per-label overrides of the catalog product
    product_name_override = Column(String, nullable=True)
    product_flavor_override = Column(String, nullable=True)
    product_flavor_image_override = Column(String, nullable=True)
    product_color_dark_override = Column(String, nullable=True)
    product_color_light_override = Column(String, nullable=True)
    product_net_weight_override = Column(String, nullable=True)

    ingredients = Column(Text, nullable=True)
    how_to_serve_instructions = Column(Text, nullable=True)
    barcode_image_url = Column(String, nullable=True)
    qr_code_url = Column(String, nullable=True)
    language_setting = Column(Integer, default=0)  # 0 primary, 1 secondary, 2 both
    layout_config = Column(JSON, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    product = relationship("Product", back_populates="sticker_labels")
    nutrition_facts = relationship("NutritionFacts")


# Column groups: the saved row stores inputs and results side by side
INPUT_COLUMNS = [
    "product_width", "product_length", "product_height", "product_weight", "product_cost",
    "box_width", "box_length", "box_height", "box_weight", "box_cost",
    "pallet_width", "pallet_length", "pallet_max_height",
    "target_pallets", "target_products", "production_speed", "working_days", "deadline",
]

RESULT_COLUMNS = [
    "units_per_box", "boxes_per_pallet_layer", "layers_per_pallet",
    "total_units_per_pallet", "total_boxes_needed", "total_pallets_needed",
    "weight_per_box", "weight_per_pallet_layer", "weight_per_pallet", "total_weight",
    "cost_per_box", "cost_per_pallet_layer", "cost_per_pallet", "total_cost",
    "estimated_days", "daily_production",
    "pallet_utilization", "box_utilization",
]

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_
from sqlalchemy.orm import Session
from typing import List, Optional
from .. import models, schemas
from ..database import get_db
from ..snapshots import default_product_data, row_to_product_data
from .sticker_labels import default_sticker_label, find_sticker_label

router = APIRouter(prefix="/products", tags=["products"])

# Starter catalog: base_price is the default unit cost for new configurations
DEFAULT_PRODUCTS = [
    {"sku": "SNK-CHIP-150", "name": "Tortilla Chips 150 g", "unit_of_measure": "bag", "base_price": 1.85,
     "description": "Salted tortilla chips, single-serve bag"},
    {"sku": "SNK-NUT-250", "name": "Roasted Peanuts 250 g", "unit_of_measure": "jar", "base_price": 3.40,
     "description": "Dry roasted peanuts in PET jar"},
    {"sku": "BEV-JUG-1000", "name": "Fruit Drink 1 L", "unit_of_measure": "bottle", "base_price": 1.10,
     "description": "Fruit drink concentrate, 1 L bottle"},
    {"sku": "SAU-HOT-500", "name": "Hot Sauce 500 ml", "unit_of_measure": "bottle", "base_price": 2.75,
     "description": "Chili hot sauce, glass bottle"},
    {"sku": "CND-TAM-400", "name": "Tamarind Candy 400 g", "unit_of_measure": "box", "base_price": 4.20,
     "description": "Assorted tamarind candy, display box"},
]

# NOT NULL columns a PATCH may not clear
REQUIRED_PRODUCT_FIELDS = ("sku", "name")


def seed_products(db: Session) -> int:
    """Insert any missing default products. Returns the number added."""
    added = 0
    for product_data in DEFAULT_PRODUCTS:
        existing = db.query(models.Product).filter(models.Product.sku == product_data["sku"]).first()
        if not existing:
            db.add(models.Product(**product_data))
            added += 1
    db.commit()
    return added


def _get_product_or_404(product_id: int, db: Session) -> models.Product:
    product = db.query(models.Product).filter(models.Product.product_id == product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


def find_configuration(db: Session, product_id: int, user_id: Optional[str]):
    query = db.query(models.PackagingConfiguration).filter(
        models.PackagingConfiguration.product_id == product_id
    )
    if user_id is None:
        query = query.filter(models.PackagingConfiguration.user_id.is_(None))
    else:
        query = query.filter(models.PackagingConfiguration.user_id == user_id)
    return query.first()


@router.get("/seed")
def seed(db: Session = Depends(get_db)):
    """Seed the default product catalog."""
    added = seed_products(db)
    return {"ok": True, "seeded": added}


@router.get("/", response_model=List[schemas.ProductListItem])
def list_products(
    q: Optional[str] = None,
    user_id: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
):
    query = db.query(models.Product)
    if q:
        pattern = f"%{q}%"
        query = query.filter(or_(
            models.Product.name.ilike(pattern),
            models.Product.sku.ilike(pattern),
            models.Product.description.ilike(pattern),
        ))
    products = query.order_by(models.Product.name).offset(skip).limit(limit).all()

    # Which of these products already have a saved configuration for this user
    config_query = db.query(models.PackagingConfiguration.product_id).filter(
        models.PackagingConfiguration.product_id.in_([p.product_id for p in products])
    )
    if user_id is None:
        config_query = config_query.filter(models.PackagingConfiguration.user_id.is_(None))
    else:
        config_query = config_query.filter(models.PackagingConfiguration.user_id == user_id)
    configured = {row.product_id for row in config_query.all()}

    return [
        schemas.ProductListItem(
            **schemas.Product.model_validate(p).model_dump(),
            has_configuration=p.product_id in configured,
        )
        for p in products
    ]


@router.post("/", response_model=schemas.Product)
def create_product(product: schemas.ProductCreate, db: Session = Depends(get_db)):
    if db.query(models.Product).filter(models.Product.sku == product.sku).first():
        raise HTTPException(status_code=409, detail=f"SKU already exists: {product.sku}")
    db_product = models.Product(**product.model_dump())
    db.add(db_product)
    db.commit()
    db.refresh(db_product)
    return db_product


@router.get("/{product_id}", response_model=schemas.Product)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return _get_product_or_404(product_id, db)


@router.patch("/{product_id}", response_model=schemas.Product)
def update_product(product_id: int, update: schemas.ProductUpdate, db: Session = Depends(get_db)):
    product = _get_product_or_404(product_id, db)
    changes = update.model_dump(exclude_unset=True)
    for field in REQUIRED_PRODUCT_FIELDS:
        if field in changes and not (changes[field] or "").strip():
            raise HTTPException(status_code=422, detail=f"Product {field} cannot be empty")
    if "sku" in changes and changes["sku"] != product.sku:
        if db.query(models.Product).filter(models.Product.sku == changes["sku"]).first():
            raise HTTPException(status_code=409, detail=f"SKU already exists: {changes['sku']}")
    for field, value in changes.items():
        setattr(product, field, value)
    db.commit()
    db.refresh(product)
    return product


@router.get("/{product_id}/configuration", response_model=schemas.ConfigurationSeed)
def get_configuration_seed(product_id: int, user_id: Optional[str] = None, db: Session = Depends(get_db)):
    """
    Engine input for a selected product.

    Returns the saved snapshot for (product, user) if there is one,
    otherwise the default pallet / production settings with the product's
    base price as unit cost.
    """
    product = _get_product_or_404(product_id, db)
    saved = find_configuration(db, product_id, user_id)
    if saved:
        return schemas.ConfigurationSeed(
            product_id=product_id,
            configuration_id=saved.id,
            from_saved=True,
            data=row_to_product_data(saved),
        )
    return schemas.ConfigurationSeed(
        product_id=product_id,
        from_saved=False,
        data=default_product_data(product),
    )


@router.get("/{product_id}/sticker-label", response_model=schemas.StickerLabelSeed)
def get_sticker_label_seed(product_id: int, user_id: Optional[str] = None, db: Session = Depends(get_db)):
    """Saved label for (product, user), otherwise one prefilled from the catalog entry."""
    product = _get_product_or_404(product_id, db)
    saved = find_sticker_label(db, product_id, user_id)
    if saved:
        return schemas.StickerLabelSeed(
            product_id=product_id,
            label_id=saved.id,
            from_saved=True,
            label=schemas.StickerLabel.model_validate(saved),
        )
    return schemas.StickerLabelSeed(
        product_id=product_id,
        from_saved=False,
        label=default_sticker_label(product),
    )

"""
Sticker labels.

One label per (user, product): saving again for the same pair overwrites
it. Saves without a user_id are stored under the "anonymous" user.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import models, schemas
from ..database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sticker-labels", tags=["sticker-labels"])


def find_sticker_label(db: Session, product_id: int, user_id: Optional[str]):
    return db.query(models.StickerLabel).filter(
        models.StickerLabel.product_id == product_id,
        models.StickerLabel.user_id == (user_id or models.ANONYMOUS_USER),
    ).first()


def default_sticker_label(product: models.Product) -> schemas.StickerLabelBase:
    """Starting label for a product that has none saved."""
    return schemas.StickerLabelBase(
        label_name=f"{product.name} Label",
        product_name_override=product.name,
        barcode_image_url=product.barcode,
    )


def _get_label_or_404(label_id: int, db: Session) -> models.StickerLabel:
    row = db.query(models.StickerLabel).filter(models.StickerLabel.id == label_id).first()
    if not row:
        raise HTTPException(status_code=404, detail="Sticker label not found")
    return row


@router.post("/", response_model=schemas.StickerLabel)
def save_sticker_label(request: schemas.StickerLabelSave, db: Session = Depends(get_db)):
    """Upsert on (user_id, product_id)."""
    name = request.label_name.strip()
    if not name:
        raise HTTPException(status_code=422, detail="Label name is required")

    product = db.query(models.Product).filter(models.Product.product_id == request.product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    if request.nutrition_facts_id is not None:
        nutrition = db.query(models.NutritionFacts).filter(
            models.NutritionFacts.id == request.nutrition_facts_id
        ).first()
        if not nutrition:
            raise HTTPException(status_code=404, detail="Nutrition facts not found")

    user_id = request.user_id or models.ANONYMOUS_USER
    row = find_sticker_label(db, request.product_id, user_id)
    if row is None:
        row = models.StickerLabel(product_id=request.product_id, user_id=user_id)
        db.add(row)
        logger.info("Saving new sticker label for product %s (user %s)", request.product_id, user_id)
    else:
        logger.info("Overwriting sticker label %s for product %s", row.id, request.product_id)

    for field, value in request.model_dump(exclude={"product_id", "user_id"}).items():
        setattr(row, field, value)
    row.label_name = name
    db.commit()
    db.refresh(row)
    return row


@router.get("/", response_model=List[schemas.StickerLabel])
def list_sticker_labels(
    user_id: Optional[str] = None,
    product_id: Optional[int] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
):
    query = db.query(models.StickerLabel)
    if user_id is not None:
        query = query.filter(models.StickerLabel.user_id == user_id)
    if product_id is not None:
        query = query.filter(models.StickerLabel.product_id == product_id)
    return query.order_by(models.StickerLabel.updated_at.desc()).offset(skip).limit(limit).all()


@router.get("/{label_id}", response_model=schemas.StickerLabel)
def get_sticker_label(label_id: int, db: Session = Depends(get_db)):
    return _get_label_or_404(label_id, db)


@router.delete("/{label_id}")
def delete_sticker_label(label_id: int, db: Session = Depends(get_db)):
    row = _get_label_or_404(label_id, db)
    db.delete(row)
    db.commit()
    return {"ok": True, "deleted": label_id}

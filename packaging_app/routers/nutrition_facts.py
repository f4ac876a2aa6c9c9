"""
Nutrition facts panels.

Stored per product (or unattached), several per product. Sticker labels
reference one panel by id. Rendering the panel is left to the client.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import models, schemas
from ..database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/nutrition-facts", tags=["nutrition-facts"])


def _get_nutrition_or_404(nutrition_id: int, db: Session) -> models.NutritionFacts:
    row = db.query(models.NutritionFacts).filter(models.NutritionFacts.id == nutrition_id).first()
    if not row:
        raise HTTPException(status_code=404, detail="Nutrition facts not found")
    return row


@router.post("/", response_model=schemas.NutritionFacts)
def create_nutrition_facts(request: schemas.NutritionFactsCreate, db: Session = Depends(get_db)):
    if not request.label_name.strip():
        raise HTTPException(status_code=422, detail="Label name is required")
    if request.product_id is not None:
        product = db.query(models.Product).filter(models.Product.product_id == request.product_id).first()
        if not product:
            raise HTTPException(status_code=404, detail="Product not found")

    row = models.NutritionFacts(**request.model_dump())
    row.label_name = request.label_name.strip()
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("Saved nutrition facts %s for product %s", row.id, row.product_id)
    return row


@router.get("/", response_model=List[schemas.NutritionFacts])
def list_nutrition_facts(
    product_id: Optional[int] = None,
    user_id: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
):
    """Newest first."""
    query = db.query(models.NutritionFacts)
    if product_id is not None:
        query = query.filter(models.NutritionFacts.product_id == product_id)
    if user_id is not None:
        query = query.filter(models.NutritionFacts.user_id == user_id)
    return query.order_by(
        models.NutritionFacts.created_at.desc(), models.NutritionFacts.id.desc()
    ).offset(skip).limit(limit).all()


@router.get("/{nutrition_id}", response_model=schemas.NutritionFacts)
def get_nutrition_facts(nutrition_id: int, db: Session = Depends(get_db)):
    return _get_nutrition_or_404(nutrition_id, db)


@router.delete("/{nutrition_id}")
def delete_nutrition_facts(nutrition_id: int, db: Session = Depends(get_db)):
    row = _get_nutrition_or_404(nutrition_id, db)
    # Labels keep their content, they just lose the panel
    db.query(models.StickerLabel).filter(
        models.StickerLabel.nutrition_facts_id == nutrition_id
    ).update({models.StickerLabel.nutrition_facts_id: None})
    db.delete(row)
    db.commit()
    return {"ok": True, "deleted": nutrition_id}

"""
Saved packaging configurations.

One configuration per (product, user): saving again for the same pair
overwrites the stored inputs and results. Results are always recomputed
server-side from the submitted ProductData.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session

from .. import models, schemas
from ..calculators import InvalidInputError, compute
from ..config import settings
from ..database import get_db
from ..pdf_generator import generate_configuration_pdf
from ..snapshots import apply_snapshot, row_to_configuration, row_to_product_data
from .calculations import build_report
from .products import find_configuration

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/configurations", tags=["configurations"])


def _get_configuration_or_404(configuration_id: int, db: Session) -> models.PackagingConfiguration:
    row = db.query(models.PackagingConfiguration).filter(
        models.PackagingConfiguration.id == configuration_id
    ).first()
    if not row:
        raise HTTPException(status_code=404, detail="Configuration not found")
    return row


@router.post("/", response_model=schemas.Configuration)
def save_configuration(request: schemas.ConfigurationSave, db: Session = Depends(get_db)):
    """Compute results for the submitted input and upsert on (product_id, user_id)."""
    name = request.configuration_name.strip()
    if not name:
        raise HTTPException(status_code=422, detail="Configuration name is required")

    product = db.query(models.Product).filter(models.Product.product_id == request.product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    try:
        results = compute(request.data)
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=e.to_detail())

    row = find_configuration(db, request.product_id, request.user_id)
    if row is None:
        row = models.PackagingConfiguration(product_id=request.product_id, user_id=request.user_id)
        db.add(row)
        logger.info("Saving new configuration for product %s (user %s)", request.product_id, request.user_id)
    else:
        logger.info("Overwriting configuration %s for product %s", row.id, request.product_id)

    row.configuration_name = name
    row.notes = request.notes
    apply_snapshot(row, request.data, results)
    db.commit()
    db.refresh(row)
    return row_to_configuration(row)


@router.get("/", response_model=List[schemas.Configuration])
def list_configurations(
    user_id: Optional[str] = None,
    product_id: Optional[int] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
):
    query = db.query(models.PackagingConfiguration)
    if user_id is not None:
        query = query.filter(models.PackagingConfiguration.user_id == user_id)
    if product_id is not None:
        query = query.filter(models.PackagingConfiguration.product_id == product_id)
    rows = query.order_by(models.PackagingConfiguration.updated_at.desc()).offset(skip).limit(limit).all()
    return [row_to_configuration(row) for row in rows]


@router.get("/{configuration_id}", response_model=schemas.Configuration)
def get_configuration(configuration_id: int, db: Session = Depends(get_db)):
    return row_to_configuration(_get_configuration_or_404(configuration_id, db))


@router.delete("/{configuration_id}")
def delete_configuration(configuration_id: int, db: Session = Depends(get_db)):
    row = _get_configuration_or_404(configuration_id, db)
    db.delete(row)
    db.commit()
    return {"ok": True, "deleted": configuration_id}


@router.get("/{configuration_id}/pdf")
def download_pdf(configuration_id: int, db: Session = Depends(get_db)):
    """
    Download the packaging report for a saved configuration.

    Returns: application/pdf
    """
    row = _get_configuration_or_404(configuration_id, db)

    try:
        report = build_report(row_to_product_data(row))
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=e.to_detail())

    header = {
        "company_name": settings.COMPANY_NAME,
        "currency_symbol": settings.CURRENCY_SYMBOL,
        "configuration_name": row.configuration_name,
        "product_name": row.product.name if row.product else "",
        "sku": row.product.sku if row.product else "",
        "notes": row.notes,
        "updated_at": row.updated_at,
    }

    # Convert bytearray to bytes for Response compatibility
    pdf_bytes = bytes(generate_configuration_pdf(header, row_to_product_data(row), report))

    filename = f"Packaging-{header['sku'] or configuration_id}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
        },
    )

"""
Calculation endpoints — stateless, no database.

POST /api/calculate         — ProductData → CalculationResults
POST /api/calculate/report  — results + timeline + truck plan + insights
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from .. import schemas
from ..calculators import InvalidInputError, compute
from ..calculators.insights import build_insights
from ..calculators.timeline import project_timeline
from ..calculators.truck_load import plan_truck_load
from ..config import settings

router = APIRouter(prefix="/calculate", tags=["calculate"])


def build_report(data: schemas.ProductData, start_date: Optional[date] = None) -> dict:
    """Everything the results dashboard shows for one ProductData snapshot."""
    results = compute(data)
    return {
        "results": results.model_dump(by_alias=True),
        "timeline": project_timeline(data, results, start_date=start_date),
        "truck": plan_truck_load(
            data, results,
            truck_width=settings.TRUCK_WIDTH,
            truck_length=settings.TRUCK_LENGTH,
        ),
        "analysis": build_insights(data, results),
    }


@router.post("", response_model=schemas.CalculationResults)
def calculate(data: schemas.ProductData):
    try:
        return compute(data)
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=e.to_detail())


@router.post("/report")
def calculate_report(
    data: schemas.ProductData,
    start_date: Optional[date] = Query(None, description="Production start, defaults to today"),
):
    try:
        return build_report(data, start_date=start_date)
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=e.to_detail())

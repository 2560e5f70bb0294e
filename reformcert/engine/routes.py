"""
Deduction engine HTTP routes — GET  /api/work-types/{category}
                                POST /api/works/{category}/calculate

Both are stateless: catalog listing and Calculate never touch the database.
Engine input errors propagate to the RenovationInputError handler in main.py
(HTTP 400).
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from reformcert.cache import rate_limiter
from reformcert.engine.catalogs import CatalogSet, get_catalogs
from reformcert.engine.deduction import calculate_category_deduction
from reformcert.engine.schemas import CalculateRequest, Category

router = APIRouter(prefix="/api", tags=["deduction_engine"])
logger = logging.getLogger(__name__)


@router.get("/work-types/{category}")
async def list_work_types(
    category: Category,
    catalogs: CatalogSet = Depends(get_catalogs),
) -> JSONResponse:
    """Catalog entries of one category, grouped by sub-category in table order."""
    catalog = catalogs[category]
    groups = [
        {
            "sub_category": sub_category,
            "work_types": [entry.model_dump() for entry in entries],
        }
        for sub_category, entries in catalog.grouped().items()
    ]
    return JSONResponse(
        status_code=200,
        content={"category": category.value, "count": len(catalog), "groups": groups},
    )


@router.post(
    "/works/{category}/calculate",
    dependencies=[Depends(rate_limiter("calculate"))],
)
async def calculate(
    category: Category,
    body: CalculateRequest,
    catalogs: CatalogSet = Depends(get_catalogs),
) -> JSONResponse:
    """
    Calculate one category's deduction. No persistence.

    Returns:
      200: CategoryDeductionResult
      400: UNKNOWN_WORK_TYPE / INVALID_QUANTITY / INVALID_RATIO / VALIDATION_ERROR
      429: RATE_LIMITED
    """
    result = calculate_category_deduction(
        category,
        body.works,
        subsidy_amount=body.subsidy_amount,
        flags=body.flags,
        catalogs=catalogs,
    )
    logger.info("Calculated category=%s items=%d", category.value, len(result.works))
    return JSONResponse(status_code=200, content=result.model_dump(mode="json"))

"""
Certificate HTTP routes — per-certificate storage and aggregation.

  GET    /api/certificates/{certificate_id}/works/{category}   stored result
  POST   /api/certificates/{certificate_id}/works/{category}   Save
  DELETE /api/certificates/{certificate_id}/works/{category}
  GET    /api/certificates/{certificate_id}/combined           Combine
  GET    /api/certificates/{certificate_id}/cost-summary       第1号〜第6号 breakdown

certificate_id is opaque here; certificates themselves are owned elsewhere.
Combine and cost-summary are always derived fresh from stored summaries.
"""
from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from reformcert.cache import rate_limiter
from reformcert.database import get_db
from reformcert.engine.catalogs import CatalogSet, get_catalogs
from reformcert.engine.classification import (
    housing_loan_eligibility_issue,
    summarize_certificate_cost,
)
from reformcert.engine.combiner import build_combined_report
from reformcert.engine.deduction import calculate_category_deduction
from reformcert.engine.schemas import (
    CalculateRequest,
    Category,
    SaveResponse,
    StoredCategoryResponse,
)
from reformcert.store import (
    delete_category,
    get_category,
    get_category_results,
    replace_category_works,
)

router = APIRouter(prefix="/api/certificates", tags=["certificates"])
logger = logging.getLogger(__name__)

CertificateId = Annotated[str, Path(min_length=1, max_length=64)]


@router.get("/{certificate_id}/works/{category}")
async def get_category_works(
    certificate_id: CertificateId,
    category: Category,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    result = await get_category(db, certificate_id, category)
    if result is None:
        raise HTTPException(
            status_code=404,
            detail=f"No {category.value} works stored for certificate {certificate_id}",
        )
    body = StoredCategoryResponse(certificate_id=certificate_id, result=result)
    return JSONResponse(status_code=200, content=body.model_dump(mode="json"))


@router.post(
    "/{certificate_id}/works/{category}",
    dependencies=[Depends(rate_limiter("save"))],
)
async def save_category_works(
    certificate_id: CertificateId,
    category: Category,
    body: CalculateRequest,
    db: AsyncSession = Depends(get_db),
    catalogs: CatalogSet = Depends(get_catalogs),
) -> JSONResponse:
    """
    Save: calculate, then replace the category's line items and upsert its
    summary in one transaction. Nothing is written if the calculation fails.
    """
    result = calculate_category_deduction(
        category,
        body.works,
        subsidy_amount=body.subsidy_amount,
        flags=body.flags,
        catalogs=catalogs,
    )
    summary_id, work_item_ids = await replace_category_works(db, certificate_id, category, result)
    response = SaveResponse(
        certificate_id=certificate_id,
        result=result,
        summary_id=summary_id,
        work_item_ids=work_item_ids,
    )
    return JSONResponse(status_code=200, content=response.model_dump(mode="json"))


@router.delete("/{certificate_id}/works/{category}")
async def delete_category_works(
    certificate_id: CertificateId,
    category: Category,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    deleted = await delete_category(db, certificate_id, category)
    if not deleted:
        raise HTTPException(
            status_code=404,
            detail=f"No {category.value} works stored for certificate {certificate_id}",
        )
    return JSONResponse(
        status_code=200,
        content={"certificate_id": certificate_id, "category": category.value, "deleted": True},
    )


@router.get("/{certificate_id}/combined")
async def get_combined(
    certificate_id: CertificateId,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Combine every stored category. A certificate with nothing stored yields zeros."""
    results = await get_category_results(db, certificate_id)
    report = build_combined_report(results, certificate_id=certificate_id)
    logger.info(
        "Combined certificate_id=%s categories=%d", certificate_id, len(report.renovations)
    )
    return JSONResponse(status_code=200, content=report.model_dump(mode="json"))


@router.get("/{certificate_id}/cost-summary")
async def get_cost_summary(
    certificate_id: CertificateId,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    results = await get_category_results(db, certificate_id)
    summary = summarize_certificate_cost(results)
    content = summary.model_dump(mode="json")
    content["certificate_id"] = certificate_id
    content["housing_loan_issue"] = housing_loan_eligibility_issue(summary)
    return JSONResponse(status_code=200, content=content)

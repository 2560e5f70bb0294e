"""
store.py — Data access facade for reformcert.

Persists per-category deduction results of a certificate and reads them back
for Combine / cost summary. Routes never touch SQLAlchemy directly.

Design principles:
  - All functions are async and accept an AsyncSession parameter
  - flush(), never commit(): get_db() owns the transaction, so a Save
    (delete line items → recreate → upsert summary) is atomic
  - Logs only certificate_id / category / counts, never money values
  - Returns Pydantic objects, not ORM instances
"""
import logging
from typing import Dict, List, Optional, Tuple

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from reformcert.engine.schemas import Category, CategoryDeductionResult
from reformcert.models.category_summary import CategorySummaryORM
from reformcert.models.work_item import WorkItemORM

logger = logging.getLogger(__name__)


async def _get_summary_row(
    db: AsyncSession,
    certificate_id: str,
    category: Category,
) -> Optional[CategorySummaryORM]:
    result = await db.execute(
        select(CategorySummaryORM).where(
            CategorySummaryORM.certificate_id == certificate_id,
            CategorySummaryORM.category == category.value,
        )
    )
    return result.scalar_one_or_none()


# ---------------------------------------------------------------------------
# Save
# ---------------------------------------------------------------------------

async def replace_category_works(
    db: AsyncSession,
    certificate_id: str,
    category: Category,
    result: CategoryDeductionResult,
) -> Tuple[str, List[str]]:
    """
    Replace one category's line items and upsert its summary.

    Returns (summary_id, work_item_ids) with work item ids in submission order.
    """
    await db.execute(
        delete(WorkItemORM).where(
            WorkItemORM.certificate_id == certificate_id,
            WorkItemORM.category == category.value,
        )
    )

    items = [
        WorkItemORM(
            certificate_id=certificate_id,
            category=category.value,
            position=position,
            work_type_code=work.work_type_code,
            work_name=work.work_name,
            unit_price=work.unit_price,
            quantity=work.quantity,
            resident_ratio=work.resident_ratio,
            window_area_ratio=work.window_area_ratio,
            amount=work.amount,
            calculated_amount=work.calculated_amount,
            description=work.description,
        )
        for position, work in enumerate(result.works)
    ]
    db.add_all(items)

    summary = await _get_summary_row(db, certificate_id, category)
    values = dict(
        total_cost=result.total_cost,
        subsidy_amount=result.subsidy_amount,
        deductible_amount=result.deductible_amount,
        max_deduction=result.max_deduction,
        has_solar_power=result.has_solar_power,
        is_excellent_housing=result.is_excellent_housing,
        result_data=result.model_dump(mode="json"),
    )
    if summary is None:
        summary = CategorySummaryORM(
            certificate_id=certificate_id,
            category=category.value,
            **values,
        )
        db.add(summary)
    else:
        for key, value in values.items():
            setattr(summary, key, value)

    await db.flush()
    logger.info(
        "Saved category works certificate_id=%s category=%s items=%d",
        certificate_id,
        category.value,
        len(items),
    )
    return summary.id, [item.id for item in items]


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

async def get_category(
    db: AsyncSession,
    certificate_id: str,
    category: Category,
) -> Optional[CategoryDeductionResult]:
    """Stored result for one category, or None if it was never saved."""
    summary = await _get_summary_row(db, certificate_id, category)
    if summary is None:
        return None
    return CategoryDeductionResult.model_validate(summary.result_data)


async def get_category_results(
    db: AsyncSession,
    certificate_id: str,
) -> Dict[Category, CategoryDeductionResult]:
    """
    Latest stored result of every category of the certificate.
    Unknown certificate → empty dict.
    """
    rows = await db.execute(
        select(CategorySummaryORM).where(CategorySummaryORM.certificate_id == certificate_id)
    )
    results: Dict[Category, CategoryDeductionResult] = {}
    for summary in rows.scalars():
        result = CategoryDeductionResult.model_validate(summary.result_data)
        results[result.category] = result
    return results


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------

async def delete_category(
    db: AsyncSession,
    certificate_id: str,
    category: Category,
) -> bool:
    """Remove a category's line items and summary. False if nothing was stored."""
    await db.execute(
        delete(WorkItemORM).where(
            WorkItemORM.certificate_id == certificate_id,
            WorkItemORM.category == category.value,
        )
    )
    summary = await _get_summary_row(db, certificate_id, category)
    if summary is None:
        return False
    await db.delete(summary)
    await db.flush()
    logger.info("Deleted category certificate_id=%s category=%s", certificate_id, category.value)
    return True

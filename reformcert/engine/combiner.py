"""
Cross-category combiner.

    total_deductible   = Σ max_deduction        (every category except other_renovation)
    max_control_amount = min(total_deductible, GLOBAL_CAP)
    excess_amount      = max(0, total_deductible − GLOBAL_CAP)
    final_deductible   = max_control_amount + other_renovation.deductible_amount
    remaining          = GLOBAL_CAP − max_control_amount

Other renovation is added after the global cap and does not consume it, so
final_deductible can exceed GLOBAL_CAP.

Stateless and idempotent. Inputs are read, never mutated.
"""
from __future__ import annotations

from typing import Mapping

from reformcert.engine.schemas import (
    Category,
    CategoryDeductionResult,
    CombinedReport,
    CombinedResult,
    CombinedSummary,
)

GLOBAL_CAP = 10_000_000


def combine(results: Mapping[Category, CategoryDeductionResult]) -> CombinedResult:
    if not results:
        return CombinedResult()

    total_deductible = sum(
        r.max_deduction for c, r in results.items() if Category(c) is not Category.other_renovation
    )
    max_control_amount = min(total_deductible, GLOBAL_CAP)

    other = results.get(Category.other_renovation)
    uncapped = other.deductible_amount if other is not None else 0

    return CombinedResult(
        total_deductible=total_deductible,
        max_control_amount=max_control_amount,
        excess_amount=max(0, total_deductible - GLOBAL_CAP),
        final_deductible=max_control_amount + uncapped,
        remaining=GLOBAL_CAP - max_control_amount,
    )


def build_combined_report(
    results: Mapping[Category, CategoryDeductionResult],
    certificate_id: str | None = None,
) -> CombinedReport:
    """Combined figure plus the per-category breakdown, ineligible ones included."""
    ordered = {c: results[c] for c in Category if c in results}
    combined = combine(ordered)
    summary = CombinedSummary(
        has_renovations=bool(ordered),
        renovation_types=list(ordered),
        total_work_cost=sum(r.total_cost for r in ordered.values()),
        max_tax_deduction=combined.final_deductible,
        remaining_limit=combined.remaining,
    )
    return CombinedReport(
        certificate_id=certificate_id,
        renovations=ordered,
        combined=combined,
        summary=summary,
    )


__all__ = ["GLOBAL_CAP", "combine", "build_combined_report"]

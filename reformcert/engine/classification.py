"""
Certificate cost summary by statutory work classification (第1号〜第6号工事).

Groups per-category results under the classification the certificate form
prints, and checks the housing-loan deduction minimum (1,000,000 yen after
subsidies, inclusive).
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from reformcert.engine.schemas import (
    Category,
    CategoryDeductionResult,
    CertificateCostSummary,
    ClassificationLine,
    ClassificationSubItem,
)

HOUSING_LOAN_MINIMUM_COST = 1_000_000


@dataclass(frozen=True)
class WorkClassification:
    number: int
    classification: str
    label: str


WORK_CLASSIFICATIONS: Mapping[Category, WorkClassification] = MappingProxyType({
    Category.seismic: WorkClassification(1, "第1号工事", "耐震改修工事"),
    Category.barrier_free: WorkClassification(2, "第2号工事", "バリアフリー改修工事"),
    Category.energy: WorkClassification(3, "第3号工事", "省エネ改修工事"),
    Category.cohabitation: WorkClassification(4, "第4号工事", "同居対応改修工事"),
    Category.long_term_housing: WorkClassification(5, "第5号工事", "長期優良住宅化改修工事"),
    Category.other_renovation: WorkClassification(6, "第6号工事", "その他の増改築等工事"),
    Category.childcare: WorkClassification(6, "第6号工事", "子育て対応改修工事"),
})

# Line 6 shows these two as sub-items, in this order
_SUB_ITEM_LABELS = (
    (Category.other_renovation, "その他増改築等"),
    (Category.childcare, "子育て対応改修"),
)

_LINE_LABELS: Dict[int, str] = {
    1: "耐震改修工事",
    2: "バリアフリー改修工事",
    3: "省エネ改修工事",
    4: "同居対応改修工事",
    5: "長期優良住宅化改修工事",
    6: "その他の増改築等工事",
}


def summarize_certificate_cost(
    results: Mapping[Category, CategoryDeductionResult],
) -> CertificateCostSummary:
    """
    Totals across every stored category.

    deductible_amount = max(0, Σ total_cost − Σ subsidy_amount); the housing
    loan requirement is met at exactly HOUSING_LOAN_MINIMUM_COST.
    """
    category_totals = {c: results[c].total_cost for c in Category if c in results}
    total_work_cost = sum(category_totals.values())
    subsidy_amount = sum(r.subsidy_amount for r in results.values())
    deductible_amount = max(0, total_work_cost - subsidy_amount)

    by_number: Dict[int, int] = {n: 0 for n in _LINE_LABELS}
    for category, total in category_totals.items():
        by_number[WORK_CLASSIFICATIONS[category].number] += total

    breakdown: List[ClassificationLine] = []
    for number, label in _LINE_LABELS.items():
        sub_items: List[ClassificationSubItem] = []
        if number == 6:
            sub_items = [
                ClassificationSubItem(label=sub_label, amount=category_totals.get(category, 0))
                for category, sub_label in _SUB_ITEM_LABELS
            ]
        breakdown.append(ClassificationLine(
            classification=f"第{number}号工事",
            classification_number=number,
            label=label,
            amount=by_number[number],
            has_work=by_number[number] > 0,
            sub_items=sub_items,
        ))

    return CertificateCostSummary(
        category_totals=category_totals,
        total_work_cost=total_work_cost,
        subsidy_amount=subsidy_amount,
        deductible_amount=deductible_amount,
        meets_housing_loan_requirement=deductible_amount >= HOUSING_LOAN_MINIMUM_COST,
        breakdown=breakdown,
    )


def _man_yen(amount: int) -> str:
    """Yen → 万円 with up to three decimals, e.g. 455000 → "45.5"."""
    return f"{amount / 10_000:,.3f}".rstrip("0").rstrip(".")


def housing_loan_eligibility_issue(summary: CertificateCostSummary) -> Optional[str]:
    """User-facing reason the housing-loan deduction is unavailable, or None."""
    if summary.total_work_cost == 0:
        return "工事費用が入力されていません。"
    if not summary.meets_housing_loan_requirement:
        return (
            "住宅借入金等特別控除を適用するには、補助金控除後の工事費用が"
            f"{_man_yen(HOUSING_LOAN_MINIMUM_COST)}万円以上である必要があります。"
            f"現在の控除対象額: {_man_yen(summary.deductible_amount)}万円"
        )
    return None


__all__ = [
    "HOUSING_LOAN_MINIMUM_COST",
    "WorkClassification",
    "WORK_CLASSIFICATIONS",
    "summarize_certificate_cost",
    "housing_loan_eligibility_issue",
]

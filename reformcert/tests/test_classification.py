"""
Certificate cost summary tests — 第1号〜第6号 breakdown and housing-loan minimum.
"""
from __future__ import annotations

import pytest

from reformcert.engine.classification import (
    HOUSING_LOAN_MINIMUM_COST,
    WORK_CLASSIFICATIONS,
    housing_loan_eligibility_issue,
    summarize_certificate_cost,
)
from reformcert.engine.deduction import deduction_from_totals
from reformcert.engine.schemas import Category


def test_housing_loan_minimum_constant() -> None:
    assert HOUSING_LOAN_MINIMUM_COST == 1_000_000


@pytest.mark.parametrize(
    "category, number",
    [
        (Category.seismic, 1),
        (Category.barrier_free, 2),
        (Category.energy, 3),
        (Category.cohabitation, 4),
        (Category.long_term_housing, 5),
        (Category.other_renovation, 6),
        (Category.childcare, 6),
    ],
)
def test_classification_numbers(category: Category, number: int) -> None:
    assert WORK_CLASSIFICATIONS[category].number == number
    assert WORK_CLASSIFICATIONS[category].classification == f"第{number}号工事"


def test_summary_breakdown() -> None:
    results = {
        Category.seismic: deduction_from_totals(Category.seismic, 3_000_000),
        Category.childcare: deduction_from_totals(Category.childcare, 800_000, 100_000),
        Category.other_renovation: deduction_from_totals(Category.other_renovation, 300_000),
    }
    summary = summarize_certificate_cost(results)

    assert summary.category_totals == {
        Category.seismic: 3_000_000,
        Category.childcare: 800_000,
        Category.other_renovation: 300_000,
    }
    assert summary.total_work_cost == 4_100_000
    assert summary.subsidy_amount == 100_000
    assert summary.deductible_amount == 4_000_000
    assert summary.meets_housing_loan_requirement

    assert [line.classification_number for line in summary.breakdown] == [1, 2, 3, 4, 5, 6]
    first, second, *_, sixth = summary.breakdown
    assert first.amount == 3_000_000 and first.has_work
    assert second.amount == 0 and not second.has_work
    assert sixth.amount == 1_100_000
    assert [(s.label, s.amount) for s in sixth.sub_items] == [
        ("その他増改築等", 300_000),
        ("子育て対応改修", 800_000),
    ]
    assert all(line.sub_items == [] for line in summary.breakdown[:5])


@pytest.mark.parametrize(
    "total, subsidy, meets",
    [
        (1_000_000, 0, True),        # inclusive
        (999_999, 0, False),
        (1_500_000, 500_001, False),
        (0, 0, False),
    ],
)
def test_housing_loan_minimum(total: int, subsidy: int, meets: bool) -> None:
    results = {Category.other_renovation: deduction_from_totals(Category.other_renovation, total, subsidy)}
    assert summarize_certificate_cost(results).meets_housing_loan_requirement is meets


def test_deductible_never_negative() -> None:
    results = {Category.other_renovation: deduction_from_totals(Category.other_renovation, 100_000, 300_000)}
    assert summarize_certificate_cost(results).deductible_amount == 0


def test_issue_when_nothing_entered() -> None:
    assert housing_loan_eligibility_issue(summarize_certificate_cost({})) == "工事費用が入力されていません。"


def test_issue_when_below_minimum() -> None:
    results = {Category.other_renovation: deduction_from_totals(Category.other_renovation, 455_000)}
    issue = housing_loan_eligibility_issue(summarize_certificate_cost(results))
    assert issue is not None
    assert "100万円以上" in issue
    assert issue.endswith("現在の控除対象額: 45.5万円")


def test_no_issue_when_requirement_met() -> None:
    results = {Category.seismic: deduction_from_totals(Category.seismic, 1_200_000)}
    assert housing_loan_eligibility_issue(summarize_certificate_cost(results)) is None

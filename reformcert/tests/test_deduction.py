"""
Per-category deduction tests.

Groups:
  1. Named constant verification — exact equality
  2. Cap resolvers in isolation
  3. Threshold / cap arithmetic on totals (properties over every category)
  4. Worked examples through the full calculator (fixture catalogs)
  5. Line-item validation: all-or-nothing, error codes and field paths
  6. Real catalogs
"""
from __future__ import annotations

import pytest

from reformcert.engine.catalogs import load_catalogs
from reformcert.engine.deduction import (
    CAP_BARRIER_FREE,
    CAP_CHILDCARE,
    CAP_COHABITATION,
    CAP_ENERGY,
    CAP_ENERGY_SOLAR,
    CAP_LONG_TERM_AND,
    CAP_LONG_TERM_AND_SOLAR,
    CAP_LONG_TERM_OR,
    CAP_LONG_TERM_OR_SOLAR,
    CAP_SEISMIC,
    CATEGORY_RULES,
    ELIGIBILITY_THRESHOLD,
    barrier_free_cap,
    calculate_category_deduction,
    deduction_from_totals,
    energy_cap,
    long_term_housing_cap,
    other_renovation_cap,
    seismic_cap,
)
from reformcert.engine.errors import (
    InvalidQuantityError,
    InvalidRatioError,
    UnknownWorkTypeError,
    WorkValidationError,
)
from reformcert.engine.schemas import Category, CategoryFlags, WorkLineItem

CAPPED = [c for c in Category if c is not Category.other_renovation]


# ===========================================================================
# TEST GROUP 1: Named constants
# ===========================================================================

def test_threshold_constant() -> None:
    assert ELIGIBILITY_THRESHOLD == 500_000


def test_cap_constants() -> None:
    assert CAP_SEISMIC == 2_500_000
    assert CAP_BARRIER_FREE == 2_000_000
    assert CAP_ENERGY == 2_500_000
    assert CAP_ENERGY_SOLAR == 3_500_000
    assert CAP_COHABITATION == 2_500_000
    assert CAP_CHILDCARE == 2_500_000
    assert CAP_LONG_TERM_OR == 2_500_000
    assert CAP_LONG_TERM_OR_SOLAR == 3_500_000
    assert CAP_LONG_TERM_AND == 5_000_000
    assert CAP_LONG_TERM_AND_SOLAR == 6_000_000


def test_every_category_has_a_rule() -> None:
    assert set(CATEGORY_RULES) == set(Category)
    assert CATEGORY_RULES[Category.other_renovation].threshold is None
    assert all(CATEGORY_RULES[c].threshold == ELIGIBILITY_THRESHOLD for c in CAPPED)


# ===========================================================================
# TEST GROUP 2: Cap resolvers
# ===========================================================================

@pytest.mark.parametrize(
    "has_solar, is_excellent, expected",
    [
        (False, False, CAP_LONG_TERM_OR),
        (True, False, CAP_LONG_TERM_OR_SOLAR),
        (False, True, CAP_LONG_TERM_AND),
        (True, True, CAP_LONG_TERM_AND_SOLAR),
    ],
)
def test_long_term_housing_cap(has_solar: bool, is_excellent: bool, expected: int) -> None:
    flags = CategoryFlags(has_solar_power=has_solar, is_excellent_housing=is_excellent)
    assert long_term_housing_cap(flags) == expected


def test_solar_strictly_raises_cap() -> None:
    for excellent in (False, True):
        without = CategoryFlags(has_solar_power=False, is_excellent_housing=excellent)
        with_solar = CategoryFlags(has_solar_power=True, is_excellent_housing=excellent)
        assert long_term_housing_cap(with_solar) > long_term_housing_cap(without)
    assert energy_cap(CategoryFlags(has_solar_power=True)) > energy_cap(CategoryFlags())


def test_flat_caps_ignore_flags() -> None:
    loaded = CategoryFlags(has_solar_power=True, is_excellent_housing=True)
    assert seismic_cap(loaded) == seismic_cap(CategoryFlags()) == CAP_SEISMIC
    assert barrier_free_cap(loaded) == CAP_BARRIER_FREE


def test_other_renovation_is_uncapped() -> None:
    assert other_renovation_cap(CategoryFlags()) is None


# ===========================================================================
# TEST GROUP 3: Threshold / cap arithmetic
# ===========================================================================

AFTER_SUBSIDY_VALUES = [-100_000, 0, 1, 499_999, 500_000, 500_001, 2_000_000, 2_500_001, 9_000_000]


@pytest.mark.parametrize("category", CAPPED)
@pytest.mark.parametrize("after_subsidy", AFTER_SUBSIDY_VALUES)
def test_threshold_and_cap_invariants(category: Category, after_subsidy: int) -> None:
    subsidy = 200_000
    result = deduction_from_totals(category, after_subsidy + subsidy, subsidy)
    cap = CATEGORY_RULES[category].cap_resolver(CategoryFlags())

    assert result.after_subsidy == after_subsidy
    if after_subsidy > ELIGIBILITY_THRESHOLD:
        assert result.is_eligible
        assert result.deductible_amount == after_subsidy
    else:
        assert not result.is_eligible
        assert result.deductible_amount == 0
    assert result.max_deduction == min(result.deductible_amount, cap)
    assert result.excess_amount == result.deductible_amount - result.max_deduction
    assert result.excess_amount >= 0


@pytest.mark.parametrize("after_subsidy", AFTER_SUBSIDY_VALUES)
def test_other_renovation_passes_through(after_subsidy: int) -> None:
    result = deduction_from_totals(Category.other_renovation, after_subsidy + 50_000, 50_000)
    assert result.deductible_amount == max(0, after_subsidy)
    assert result.max_deduction == result.deductible_amount
    assert result.excess_amount == 0
    assert result.is_eligible is (after_subsidy > 0)


def test_threshold_is_strictly_greater() -> None:
    assert not deduction_from_totals(Category.seismic, 500_000).is_eligible
    assert deduction_from_totals(Category.seismic, 500_001).deductible_amount == 500_001


def test_negative_subsidy_rejected() -> None:
    with pytest.raises(WorkValidationError) as exc_info:
        deduction_from_totals(Category.seismic, 1_000_000, -1)
    assert exc_info.value.field == "subsidy_amount"


def test_flags_reported_only_where_they_apply() -> None:
    loaded = CategoryFlags(has_solar_power=True, is_excellent_housing=True)

    seismic = deduction_from_totals(Category.seismic, 1_000_000, flags=loaded)
    assert not seismic.has_solar_power and not seismic.is_excellent_housing

    energy = deduction_from_totals(Category.energy, 1_000_000, flags=loaded)
    assert energy.has_solar_power and not energy.is_excellent_housing

    lth = deduction_from_totals(Category.long_term_housing, 1_000_000, flags=loaded)
    assert lth.has_solar_power and lth.is_excellent_housing


@pytest.mark.parametrize(
    "has_solar, is_excellent, expected_max",
    [
        (False, False, 2_500_000),
        (True, False, 3_500_000),
        (False, True, 5_000_000),
        (True, True, 6_000_000),
    ],
)
def test_long_term_housing_caps_applied(has_solar: bool, is_excellent: bool, expected_max: int) -> None:
    flags = CategoryFlags(has_solar_power=has_solar, is_excellent_housing=is_excellent)
    result = deduction_from_totals(Category.long_term_housing, 10_000_000, flags=flags)
    assert result.max_deduction == expected_max
    assert result.excess_amount == 10_000_000 - expected_max


def test_unknown_category_rejected() -> None:
    with pytest.raises(WorkValidationError):
        deduction_from_totals("garden", 1_000_000)


# ===========================================================================
# TEST GROUP 4: Worked examples (fixture catalogs)
# ===========================================================================

def test_example_seismic_capped(fixture_catalogs) -> None:
    """3,000,000 total, no subsidy → deductible 3,000,000, max 2,500,000, excess 500,000."""
    result = calculate_category_deduction(
        Category.seismic,
        [WorkLineItem(work_type_code="wall", quantity=30)],
        catalogs=fixture_catalogs,
    )
    assert result.total_cost == 3_000_000
    assert result.after_subsidy == 3_000_000
    assert result.deductible_amount == 3_000_000
    assert result.max_deduction == 2_500_000
    assert result.excess_amount == 500_000
    assert result.is_eligible


def test_example_energy_with_solar(fixture_catalogs) -> None:
    """4,000,000 total, subsidy 500,000, solar present → cap 3,500,000, no excess."""
    result = calculate_category_deduction(
        Category.energy,
        [WorkLineItem(work_type_code="solar_panel", quantity=8)],
        subsidy_amount=500_000,
        catalogs=fixture_catalogs,
    )
    assert result.total_cost == 4_000_000
    assert result.after_subsidy == 3_500_000
    assert result.deductible_amount == 3_500_000
    assert result.has_solar_power
    assert result.max_deduction == 3_500_000
    assert result.excess_amount == 0


def test_example_barrier_free_below_threshold(fixture_catalogs) -> None:
    """400,000 total → not eligible, nothing deductible."""
    result = calculate_category_deduction(
        Category.barrier_free,
        [WorkLineItem(work_type_code="handrail", quantity=40)],
        catalogs=fixture_catalogs,
    )
    assert result.total_cost == 400_000
    assert result.deductible_amount == 0
    assert result.max_deduction == 0
    assert result.excess_amount == 0
    assert not result.is_eligible


def test_energy_solar_flag_is_derived_not_trusted(fixture_catalogs) -> None:
    result = calculate_category_deduction(
        Category.energy,
        [WorkLineItem(work_type_code="window", quantity=60)],
        flags=CategoryFlags(has_solar_power=True),
        catalogs=fixture_catalogs,
    )
    assert not result.has_solar_power
    assert result.max_deduction == CAP_ENERGY


def test_solar_thermal_does_not_raise_energy_cap(fixture_catalogs) -> None:
    result = calculate_category_deduction(
        Category.energy,
        [WorkLineItem(work_type_code="solar_heater", quantity=10)],
        catalogs=fixture_catalogs,
    )
    assert result.total_cost == 5_000_000
    assert not result.has_solar_power
    assert result.max_deduction == CAP_ENERGY


def test_window_area_ratio_applies_to_energy(fixture_catalogs) -> None:
    result = calculate_category_deduction(
        Category.energy,
        [WorkLineItem(work_type_code="window", quantity=10, window_area_ratio=50, resident_ratio=80)],
        catalogs=fixture_catalogs,
    )
    assert result.works[0].calculated_amount == 400_000


def test_long_term_housing_reads_caller_flags(fixture_catalogs) -> None:
    result = calculate_category_deduction(
        Category.long_term_housing,
        [WorkLineItem(work_type_code="attic_vent", quantity=100)],
        flags=CategoryFlags(has_solar_power=True, is_excellent_housing=True),
        catalogs=fixture_catalogs,
    )
    assert result.total_cost == 10_000_000
    assert result.max_deduction == CAP_LONG_TERM_AND_SOLAR


def test_other_renovation_direct_entry(fixture_catalogs) -> None:
    result = calculate_category_deduction(
        Category.other_renovation,
        [
            WorkLineItem(work_type_code="extension", amount=300_000),
            WorkLineItem(work_type_code="extension", amount=1_000_000, resident_ratio=80),
        ],
        catalogs=fixture_catalogs,
    )
    assert [w.calculated_amount for w in result.works] == [300_000, 800_000]
    assert result.works[0].unit_price == 300_000
    assert result.works[0].amount == 300_000
    assert result.total_cost == 1_100_000
    assert result.deductible_amount == 1_100_000
    assert result.max_deduction == 1_100_000
    assert result.is_eligible


def test_other_renovation_subsidy_exceeding_cost(fixture_catalogs) -> None:
    result = calculate_category_deduction(
        Category.other_renovation,
        [WorkLineItem(work_type_code="extension", amount=300_000)],
        subsidy_amount=400_000,
        catalogs=fixture_catalogs,
    )
    assert result.after_subsidy == -100_000
    assert result.deductible_amount == 0
    assert not result.is_eligible


def test_empty_work_list(fixture_catalogs) -> None:
    result = calculate_category_deduction(Category.seismic, [], catalogs=fixture_catalogs)
    assert result.total_cost == 0
    assert result.works == []
    assert not result.is_eligible


def test_works_keep_submission_order(fixture_catalogs) -> None:
    result = calculate_category_deduction(
        Category.energy,
        [
            {"work_type_code": "solar_heater", "quantity": 1},
            {"work_type_code": "window", "quantity": 2},
        ],
        catalogs=fixture_catalogs,
    )
    assert [w.work_type_code for w in result.works] == ["solar_heater", "window"]
    assert result.works[1].sub_category == "窓"


# ===========================================================================
# TEST GROUP 5: Validation: all-or-nothing with field paths
# ===========================================================================

def test_unknown_code_fails_whole_batch(fixture_catalogs) -> None:
    with pytest.raises(UnknownWorkTypeError) as exc_info:
        calculate_category_deduction(
            Category.seismic,
            [
                WorkLineItem(work_type_code="wall", quantity=10),
                WorkLineItem(work_type_code="roof", quantity=10),
            ],
            catalogs=fixture_catalogs,
        )
    assert exc_info.value.field == "works.1.work_type_code"


def test_code_from_another_category_is_unknown(fixture_catalogs) -> None:
    with pytest.raises(UnknownWorkTypeError):
        calculate_category_deduction(
            Category.seismic,
            [WorkLineItem(work_type_code="solar_panel", quantity=1)],
            catalogs=fixture_catalogs,
        )


def test_invalid_quantity_reports_line(fixture_catalogs) -> None:
    works = [
        WorkLineItem(work_type_code="wall", quantity=1),
        WorkLineItem(work_type_code="wall", quantity=1),
        WorkLineItem(work_type_code="wall", quantity=0),
    ]
    with pytest.raises(InvalidQuantityError) as exc_info:
        calculate_category_deduction(Category.seismic, works, catalogs=fixture_catalogs)
    assert exc_info.value.field == "works.2.quantity"
    assert exc_info.value.code == "INVALID_QUANTITY"


@pytest.mark.parametrize(
    "line, field",
    [
        ({"work_type_code": "window", "resident_ratio": 120}, "works.0.resident_ratio"),
        ({"work_type_code": "window", "window_area_ratio": -5}, "works.0.window_area_ratio"),
    ],
)
def test_invalid_ratio_reports_field(fixture_catalogs, line: dict, field: str) -> None:
    with pytest.raises(InvalidRatioError) as exc_info:
        calculate_category_deduction(Category.energy, [line], catalogs=fixture_catalogs)
    assert exc_info.value.field == field


def test_window_ratio_outside_energy_rejected(fixture_catalogs) -> None:
    with pytest.raises(WorkValidationError) as exc_info:
        calculate_category_deduction(
            Category.seismic,
            [WorkLineItem(work_type_code="wall", window_area_ratio=50)],
            catalogs=fixture_catalogs,
        )
    assert exc_info.value.field == "works.0.window_area_ratio"


def test_direct_entry_requires_amount(fixture_catalogs) -> None:
    with pytest.raises(WorkValidationError) as exc_info:
        calculate_category_deduction(
            Category.other_renovation,
            [WorkLineItem(work_type_code="extension")],
            catalogs=fixture_catalogs,
        )
    assert exc_info.value.field == "works.0.amount"


def test_amount_on_priced_work_rejected(fixture_catalogs) -> None:
    with pytest.raises(WorkValidationError) as exc_info:
        calculate_category_deduction(
            Category.seismic,
            [WorkLineItem(work_type_code="wall", amount=1_000_000)],
            catalogs=fixture_catalogs,
        )
    assert exc_info.value.field == "works.0.amount"


@pytest.mark.parametrize("works", ["wall", None, 42, {"work_type_code": "wall"}])
def test_works_must_be_an_array(fixture_catalogs, works) -> None:
    with pytest.raises(WorkValidationError) as exc_info:
        calculate_category_deduction(Category.seismic, works, catalogs=fixture_catalogs)
    assert exc_info.value.field == "works"


def test_malformed_entry_rejected(fixture_catalogs) -> None:
    with pytest.raises(WorkValidationError) as exc_info:
        calculate_category_deduction(
            Category.seismic,
            [{"work_type_code": "wall", "quantity": 1}, "wall"],
            catalogs=fixture_catalogs,
        )
    assert exc_info.value.field == "works.1"


def test_negative_subsidy_rejected_before_pricing(fixture_catalogs) -> None:
    with pytest.raises(WorkValidationError):
        calculate_category_deduction(
            Category.seismic,
            [WorkLineItem(work_type_code="wall")],
            subsidy_amount=-1,
            catalogs=fixture_catalogs,
        )


# ===========================================================================
# TEST GROUP 6: Real catalogs
# ===========================================================================

def test_energy_with_real_catalog() -> None:
    result = calculate_category_deduction(
        Category.energy,
        [
            WorkLineItem(work_type_code="es_solar_power", quantity=3),
            WorkLineItem(work_type_code="es_glass_all_regions", quantity=100, window_area_ratio=50),
        ],
        catalogs=load_catalogs(),
    )
    assert [w.calculated_amount for w in result.works] == [1_276_500, 315_000]
    assert result.total_cost == 1_591_500
    assert result.has_solar_power
    assert result.max_deduction == 1_591_500


def test_default_catalogs_used_when_none_given() -> None:
    result = calculate_category_deduction(
        Category.seismic,
        [WorkLineItem(work_type_code="seismic_wood_wall", quantity=150)],
    )
    assert result.total_cost == 3_375_000
    assert result.max_deduction == CAP_SEISMIC
    assert result.excess_amount == 875_000

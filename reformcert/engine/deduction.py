"""
Per-category deduction calculator.

One generic calculator parameterised by a CategoryRule per category:

  1. Resolve every line item against its catalog and price it (all-or-nothing).
  2. total_cost    = Σ calculated_amount
  3. after_subsidy = total_cost − subsidy_amount        (may be negative)
  4. Eligibility:  after_subsidy > threshold            (strictly greater)
  5. Cap:          max_deduction = min(deductible, cap(flags))
  6. Assemble CategoryDeductionResult.

Other renovation has neither threshold nor cap: its non-negative after_subsidy
passes straight through.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

from reformcert.engine.amount import calculate_amount
from reformcert.engine.catalogs import CatalogSet, has_solar_power_work, load_catalogs
from reformcert.engine.errors import (
    InvalidQuantityError,
    InvalidRatioError,
    UnknownWorkTypeError,
    WorkValidationError,
)
from reformcert.engine.schemas import (
    CalculatedWorkItem,
    Category,
    CategoryDeductionResult,
    CategoryFlags,
    WorkLineItem,
)

logger = logging.getLogger(__name__)

# ===========================================================================
# ELIGIBILITY THRESHOLD
# ===========================================================================

ELIGIBILITY_THRESHOLD = 500_000     # after_subsidy must EXCEED this

# ===========================================================================
# CATEGORY CAPS (statutory maximum deductible amount per category)
# ===========================================================================

CAP_SEISMIC              = 2_500_000
CAP_BARRIER_FREE         = 2_000_000
CAP_ENERGY               = 2_500_000
CAP_ENERGY_SOLAR         = 3_500_000
CAP_COHABITATION         = 2_500_000
CAP_CHILDCARE            = 2_500_000

CAP_LONG_TERM_OR         = 2_500_000   # habitability improvement alone
CAP_LONG_TERM_OR_SOLAR   = 3_500_000
CAP_LONG_TERM_AND        = 5_000_000   # + long-term housing certification
CAP_LONG_TERM_AND_SOLAR  = 6_000_000


# ===========================================================================
# CAP RESOLVERS: flags → cap in yen, None = uncapped
# ===========================================================================

def seismic_cap(flags: CategoryFlags) -> int:
    return CAP_SEISMIC


def barrier_free_cap(flags: CategoryFlags) -> int:
    return CAP_BARRIER_FREE


def energy_cap(flags: CategoryFlags) -> int:
    return CAP_ENERGY_SOLAR if flags.has_solar_power else CAP_ENERGY


def cohabitation_cap(flags: CategoryFlags) -> int:
    return CAP_COHABITATION


def childcare_cap(flags: CategoryFlags) -> int:
    return CAP_CHILDCARE


def long_term_housing_cap(flags: CategoryFlags) -> int:
    """AND-mode (certified excellent housing) vs OR-mode, each with a solar band."""
    if flags.is_excellent_housing:
        return CAP_LONG_TERM_AND_SOLAR if flags.has_solar_power else CAP_LONG_TERM_AND
    return CAP_LONG_TERM_OR_SOLAR if flags.has_solar_power else CAP_LONG_TERM_OR


def other_renovation_cap(flags: CategoryFlags) -> Optional[int]:
    return None


# ===========================================================================
# CATEGORY RULES
# ===========================================================================

@dataclass(frozen=True)
class CategoryRule:
    """
    Everything that differs between categories.

    derives_solar:    has_solar_power comes from the submitted codes, the
                      caller's flag is ignored (energy).
    uses_flags:       caller flags are taken as-is (long-term housing).
    Neither set:      flags are irrelevant and reported as False.
    """
    category: Category
    threshold: Optional[int]
    cap_resolver: Callable[[CategoryFlags], Optional[int]]
    accepts_window_ratio: bool = False
    derives_solar: bool = False
    uses_flags: bool = False


CATEGORY_RULES: Mapping[Category, CategoryRule] = MappingProxyType({
    Category.seismic: CategoryRule(Category.seismic, ELIGIBILITY_THRESHOLD, seismic_cap),
    Category.barrier_free: CategoryRule(Category.barrier_free, ELIGIBILITY_THRESHOLD, barrier_free_cap),
    Category.energy: CategoryRule(
        Category.energy, ELIGIBILITY_THRESHOLD, energy_cap,
        accepts_window_ratio=True, derives_solar=True,
    ),
    Category.cohabitation: CategoryRule(Category.cohabitation, ELIGIBILITY_THRESHOLD, cohabitation_cap),
    Category.childcare: CategoryRule(Category.childcare, ELIGIBILITY_THRESHOLD, childcare_cap),
    Category.other_renovation: CategoryRule(Category.other_renovation, None, other_renovation_cap),
    Category.long_term_housing: CategoryRule(
        Category.long_term_housing, ELIGIBILITY_THRESHOLD, long_term_housing_cap,
        uses_flags=True,
    ),
})


def get_rule(category: Category) -> CategoryRule:
    try:
        return CATEGORY_RULES[Category(category)]
    except (KeyError, ValueError):
        raise WorkValidationError(f"Unknown category '{category}'", field="category") from None


def _applied_flags(rule: CategoryRule, flags: Optional[CategoryFlags]) -> CategoryFlags:
    """Flags the rule actually consumes; anything else is reset to False."""
    flags = flags or CategoryFlags()
    if rule.uses_flags:
        return flags
    if rule.derives_solar:
        return CategoryFlags(has_solar_power=flags.has_solar_power)
    return CategoryFlags()


# ===========================================================================
# LINE-ITEM RESOLUTION
# ===========================================================================

def _coerce_line(raw: Union[WorkLineItem, Mapping], field: str) -> WorkLineItem:
    if isinstance(raw, WorkLineItem):
        return raw
    if not isinstance(raw, Mapping):
        raise WorkValidationError("Work entry must be an object", field=field)
    try:
        return WorkLineItem.model_validate(raw)
    except ValidationError as exc:
        first = exc.errors()[0]
        loc = ".".join(str(p) for p in first["loc"])
        raise WorkValidationError(first["msg"], field=f"{field}.{loc}" if loc else field) from None


def _offending_ratio(line: WorkLineItem) -> str:
    ratio = line.resident_ratio
    if ratio is not None and not 0 <= ratio <= 100:
        return "resident_ratio"
    return "window_area_ratio"


def resolve_work_items(
    category: Category,
    works: Sequence[Union[WorkLineItem, Mapping]],
    catalogs: CatalogSet,
) -> List[CalculatedWorkItem]:
    """
    Look up and price every submitted line, in order.

    The first failing line aborts the whole batch; the raised error carries
    the request path of the offending field (e.g. "works.2.quantity").
    """
    if isinstance(works, (str, bytes)) or not isinstance(works, Sequence):
        raise WorkValidationError("works must be an array", field="works")

    rule = get_rule(category)
    catalog = catalogs[rule.category]
    items: List[CalculatedWorkItem] = []

    for index, raw in enumerate(works):
        prefix = f"works.{index}"
        line = _coerce_line(raw, prefix)

        try:
            definition = catalog.lookup(line.work_type_code)
        except UnknownWorkTypeError as exc:
            raise exc.with_field(f"{prefix}.work_type_code") from None

        if line.window_area_ratio is not None and not rule.accepts_window_ratio:
            raise WorkValidationError(
                "window_area_ratio is only accepted for energy works",
                field=f"{prefix}.window_area_ratio",
            )

        if definition.unit_price is None:
            if line.amount is None:
                raise WorkValidationError(
                    f"Work type '{definition.code}' requires a direct amount",
                    field=f"{prefix}.amount",
                )
            unit_price = line.amount
        else:
            if line.amount is not None:
                raise WorkValidationError(
                    f"Work type '{definition.code}' is priced from the catalog; amount is not accepted",
                    field=f"{prefix}.amount",
                )
            unit_price = definition.unit_price

        try:
            calculated = calculate_amount(
                unit_price, line.quantity, line.resident_ratio, line.window_area_ratio,
            )
        except InvalidQuantityError as exc:
            raise exc.with_field(f"{prefix}.quantity") from None
        except InvalidRatioError as exc:
            raise exc.with_field(f"{prefix}.{_offending_ratio(line)}") from None

        items.append(CalculatedWorkItem(
            work_type_code=definition.code,
            work_name=definition.name,
            sub_category=definition.category,
            unit_price=unit_price,
            unit=definition.unit,
            quantity=line.quantity,
            resident_ratio=line.resident_ratio,
            window_area_ratio=line.window_area_ratio,
            description=line.description,
            amount=line.amount,
            calculated_amount=calculated,
        ))

    return items


# ===========================================================================
# THRESHOLD / CAP ARITHMETIC
# ===========================================================================

def deduction_from_totals(
    category: Category,
    total_cost: int,
    subsidy_amount: int = 0,
    flags: Optional[CategoryFlags] = None,
    works: Optional[List[CalculatedWorkItem]] = None,
) -> CategoryDeductionResult:
    """
    Steps 3–6 on an already-summed total.

    Flags are taken at face value here (no solar derivation), so this is also
    the path for rebuilding a result from a persisted summary row.
    """
    rule = get_rule(category)
    if subsidy_amount < 0:
        raise WorkValidationError("subsidy_amount must not be negative", field="subsidy_amount")

    applied = _applied_flags(rule, flags)
    after_subsidy = total_cost - subsidy_amount

    if rule.threshold is None:
        deductible = max(0, after_subsidy)
        max_deduction = deductible
        is_eligible = deductible > 0
    else:
        is_eligible = after_subsidy > rule.threshold
        deductible = after_subsidy if is_eligible else 0
        cap = rule.cap_resolver(applied)
        max_deduction = deductible if cap is None else min(deductible, cap)

    return CategoryDeductionResult(
        category=rule.category,
        total_cost=total_cost,
        subsidy_amount=subsidy_amount,
        after_subsidy=after_subsidy,
        deductible_amount=deductible,
        max_deduction=max_deduction,
        excess_amount=deductible - max_deduction,
        is_eligible=is_eligible,
        has_solar_power=applied.has_solar_power,
        is_excellent_housing=applied.is_excellent_housing,
        works=list(works or []),
    )


def calculate_category_deduction(
    category: Category,
    works: Sequence[Union[WorkLineItem, Mapping]],
    subsidy_amount: int = 0,
    flags: Optional[CategoryFlags] = None,
    catalogs: Optional[CatalogSet] = None,
) -> CategoryDeductionResult:
    """
    Full per-category calculation (steps 1–6).

    Energy sets has_solar_power from the submitted codes, overriding the
    caller's flag. Raises a RenovationInputError subclass on any bad input;
    nothing partial is ever returned.
    """
    rule = get_rule(category)
    catalogs = catalogs or load_catalogs()

    if subsidy_amount is None or subsidy_amount < 0:
        raise WorkValidationError("subsidy_amount must not be negative", field="subsidy_amount")

    items = resolve_work_items(rule.category, works, catalogs)
    total_cost = sum(item.calculated_amount for item in items)

    flags = flags or CategoryFlags()
    if rule.derives_solar:
        flags = CategoryFlags(
            has_solar_power=has_solar_power_work((i.work_type_code for i in items), catalogs),
        )

    result = deduction_from_totals(rule.category, total_cost, subsidy_amount, flags, works=items)
    logger.debug(
        "Category %s: %d works, eligible=%s, solar=%s, excellent=%s",
        rule.category.value, len(items), result.is_eligible,
        result.has_solar_power, result.is_excellent_housing,
    )
    return result


__all__ = [
    "ELIGIBILITY_THRESHOLD",
    "CAP_SEISMIC",
    "CAP_BARRIER_FREE",
    "CAP_ENERGY",
    "CAP_ENERGY_SOLAR",
    "CAP_COHABITATION",
    "CAP_CHILDCARE",
    "CAP_LONG_TERM_OR",
    "CAP_LONG_TERM_OR_SOLAR",
    "CAP_LONG_TERM_AND",
    "CAP_LONG_TERM_AND_SOLAR",
    "CategoryRule",
    "CATEGORY_RULES",
    "get_rule",
    "seismic_cap",
    "barrier_free_cap",
    "energy_cap",
    "cohabitation_cap",
    "childcare_cap",
    "long_term_housing_cap",
    "other_renovation_cap",
    "resolve_work_items",
    "deduction_from_totals",
    "calculate_category_deduction",
]

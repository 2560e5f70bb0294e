"""
schemas.py — Deduction engine Pydantic v2 data contracts.

Defines:
  - Category                (the seven statutory renovation categories)
  - WorkTypeDefinition      (one catalog row — immutable reference data)
  - WorkLineItem            (one submitted work entry)
  - CalculatedWorkItem      (line item enriched with its catalog row and amount)
  - CategoryFlags           (cap-selecting booleans supplied by the caller)
  - CategoryDeductionResult (per-category outcome)
  - CombinedResult / CombinedReport (cross-category aggregation)
  - CertificateCostSummary  (classification breakdown + housing-loan check)
  - ErrorDetail, ErrorBody, ErrorResponse (cross-cutting error envelope)

MONEY: every amount is whole yen (int). Quantities and ratios are floats at the
boundary; amount.py converts them to Decimal before multiplying.

Quantity and ratio bounds are NOT declared on the models: the engine checks them
so that callers receive INVALID_QUANTITY / INVALID_RATIO rather than a generic
schema error.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Category
# ---------------------------------------------------------------------------

class Category(str, Enum):
    seismic = "seismic"
    barrier_free = "barrier_free"
    energy = "energy"
    cohabitation = "cohabitation"
    childcare = "childcare"
    other_renovation = "other_renovation"
    long_term_housing = "long_term_housing"


# ---------------------------------------------------------------------------
# Catalog row
# ---------------------------------------------------------------------------

class WorkTypeDefinition(BaseModel):
    """
    One row of a standard unit-price table.

    category is the sub-category label inside the catalog (e.g. 窓, 太陽光発電),
    not the statutory Category — the owning WorkCatalog carries that.
    unit_price=None marks a direct-entry work type: the line item supplies the
    amount itself (other renovation works).
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    code: str
    name: str
    category: str
    unit_price: Optional[int] = None
    unit: str = "式"
    description: str = ""
    region_code: Optional[str] = None      # climate region band, energy works only
    needs_window_ratio: bool = False       # window works priced by window-area ratio


# ---------------------------------------------------------------------------
# Line items
# ---------------------------------------------------------------------------

class WorkLineItem(BaseModel):
    """A single submitted work entry. Ratios are percentages (0–100)."""
    model_config = ConfigDict(extra="forbid")

    work_type_code: str = Field(..., min_length=1)
    quantity: float = Field(default=1.0, description="Strictly positive.")
    resident_ratio: Optional[float] = Field(
        default=None,
        description="Share of the property used as a dwelling, 0–100. Absent = 100.",
    )
    window_area_ratio: Optional[float] = Field(
        default=None,
        description="Share of window area actually treated, 0–100. Energy works only.",
    )
    amount: Optional[int] = Field(
        default=None, ge=0,
        description="Direct-entry cost in yen. Only for work types without a unit price.",
    )
    description: Optional[str] = None


class CalculatedWorkItem(BaseModel):
    """WorkLineItem + catalog lookup + computed amount."""
    model_config = ConfigDict(extra="forbid")

    work_type_code: str
    work_name: str
    sub_category: str
    unit_price: int
    unit: str
    quantity: float
    resident_ratio: Optional[float] = None
    window_area_ratio: Optional[float] = None
    description: Optional[str] = None
    amount: Optional[int] = None           # direct-entry amount as submitted
    calculated_amount: int


# ---------------------------------------------------------------------------
# Per-category result
# ---------------------------------------------------------------------------

class CategoryFlags(BaseModel):
    """
    Cap-selecting flags.

    has_solar_power:      ignored for energy (derived from the submitted codes);
                          read as-is for long_term_housing.
    is_excellent_housing: long_term_housing only — AND-mode (certified) vs OR-mode.
    """
    model_config = ConfigDict(extra="forbid")

    has_solar_power: bool = False
    is_excellent_housing: bool = False


class CategoryDeductionResult(BaseModel):
    """
    Outcome for one category.

    Invariants (threshold T, cap C; T and C absent for other_renovation):
      after_subsidy     = total_cost - subsidy_amount        (may be negative)
      is_eligible       = after_subsidy > T
      deductible_amount = after_subsidy if is_eligible else 0
      max_deduction     = min(deductible_amount, C)
      excess_amount     = deductible_amount - max_deduction  (never negative)
    """
    model_config = ConfigDict(extra="forbid")

    category: Category
    total_cost: int
    subsidy_amount: int
    after_subsidy: int
    deductible_amount: int
    max_deduction: int
    excess_amount: int
    is_eligible: bool
    has_solar_power: bool = False
    is_excellent_housing: bool = False
    works: List[CalculatedWorkItem] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Combined result
# ---------------------------------------------------------------------------

class CombinedResult(BaseModel):
    """Certificate-level figure. Derived on demand, never authoritative."""
    model_config = ConfigDict(extra="forbid")

    total_deductible: int = 0       # Σ max_deduction, other_renovation excluded
    max_control_amount: int = 0     # min(total_deductible, global cap)
    excess_amount: int = 0          # max(0, total_deductible - global cap)
    final_deductible: int = 0       # max_control_amount + other_renovation deductible
    remaining: int = 0              # global cap - max_control_amount


class CombinedSummary(BaseModel):
    model_config = ConfigDict(extra="forbid")

    has_renovations: bool
    renovation_types: List[Category]
    total_work_cost: int
    max_tax_deduction: int
    remaining_limit: int


class CombinedReport(BaseModel):
    """Response of the Combine operation: breakdown + combined figure."""
    model_config = ConfigDict(extra="forbid")

    certificate_id: Optional[str] = None
    renovations: Dict[Category, CategoryDeductionResult]
    combined: CombinedResult
    summary: CombinedSummary


# ---------------------------------------------------------------------------
# Certificate cost summary (statutory classification 1–6)
# ---------------------------------------------------------------------------

class ClassificationSubItem(BaseModel):
    label: str
    amount: int


class ClassificationLine(BaseModel):
    classification: str             # e.g. 第1号工事
    classification_number: int
    label: str
    amount: int
    has_work: bool
    sub_items: List[ClassificationSubItem] = Field(default_factory=list)


class CertificateCostSummary(BaseModel):
    model_config = ConfigDict(extra="forbid")

    category_totals: Dict[Category, int]
    total_work_cost: int
    subsidy_amount: int
    deductible_amount: int
    meets_housing_loan_requirement: bool
    breakdown: List[ClassificationLine]


# ---------------------------------------------------------------------------
# Requests / responses
# ---------------------------------------------------------------------------

class CalculateRequest(BaseModel):
    """Body of Calculate and Save."""
    model_config = ConfigDict(extra="forbid")

    works: List[WorkLineItem]
    subsidy_amount: int = Field(default=0, ge=0)
    flags: Optional[CategoryFlags] = None


class SaveResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    certificate_id: str
    result: CategoryDeductionResult
    summary_id: str
    work_item_ids: List[str]


class StoredCategoryResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    certificate_id: str
    result: CategoryDeductionResult


# ---------------------------------------------------------------------------
# Error envelope: used by main.py exception handlers (cross-cutting)
# ---------------------------------------------------------------------------

class ErrorDetail(BaseModel):
    """Single field-level validation error."""
    model_config = ConfigDict(extra="forbid")

    field: Optional[str] = None    # Dot-notation path, e.g. "works.2.quantity"
    issue: str


class ErrorBody(BaseModel):
    model_config = ConfigDict(extra="forbid")

    code: str                      # VALIDATION_ERROR, UNKNOWN_WORK_TYPE, NOT_FOUND, ...
    message: str
    details: List[ErrorDetail] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Structure: {"error": {"code": "...", "message": "...", "details": [...]}}"""
    model_config = ConfigDict(extra="forbid")

    error: ErrorBody


__all__ = [
    "Category",
    "WorkTypeDefinition",
    "WorkLineItem",
    "CalculatedWorkItem",
    "CategoryFlags",
    "CategoryDeductionResult",
    "CombinedResult",
    "CombinedSummary",
    "CombinedReport",
    "ClassificationSubItem",
    "ClassificationLine",
    "CertificateCostSummary",
    "CalculateRequest",
    "SaveResponse",
    "StoredCategoryResponse",
    "ErrorDetail",
    "ErrorBody",
    "ErrorResponse",
]

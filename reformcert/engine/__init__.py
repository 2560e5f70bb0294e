"""
Renovation tax deduction engine — pure, synchronous, no I/O.

catalogs → amount → deduction (per category) → combiner; classification
summarises stored categories for the certificate form.
"""
from reformcert.engine.combiner import GLOBAL_CAP, build_combined_report, combine
from reformcert.engine.deduction import (
    CATEGORY_RULES,
    calculate_category_deduction,
    deduction_from_totals,
)
from reformcert.engine.errors import RenovationInputError

__all__ = [
    "GLOBAL_CAP",
    "CATEGORY_RULES",
    "RenovationInputError",
    "build_combined_report",
    "calculate_category_deduction",
    "combine",
    "deduction_from_totals",
]

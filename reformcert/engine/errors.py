"""
errors.py — caller-input error taxonomy for the deduction engine.

Every error the engine raises is a RenovationInputError. None of them are
transient: the caller corrects the input and resubmits. main.py maps the whole
family to HTTP 400 with the standard {error: {code, message, details}} envelope.

  UnknownWorkTypeError  → UNKNOWN_WORK_TYPE   code not in the category's catalog
  InvalidQuantityError  → INVALID_QUANTITY    quantity <= 0
  InvalidRatioError     → INVALID_RATIO       ratio outside [0, 100]
  WorkValidationError   → VALIDATION_ERROR    malformed request content
"""
from __future__ import annotations

from typing import Optional


class RenovationInputError(ValueError):
    """Base class: one offending field, one human-readable issue."""

    code = "VALIDATION_ERROR"

    def __init__(self, issue: str, field: Optional[str] = None) -> None:
        super().__init__(issue)
        self.issue = issue
        self.field = field

    def with_field(self, field: str) -> "RenovationInputError":
        """Return the same error re-anchored at a request field path."""
        return type(self)(self.issue, field=field)

    def to_detail(self) -> dict:
        return {"field": self.field, "issue": self.issue}


class UnknownWorkTypeError(RenovationInputError):
    code = "UNKNOWN_WORK_TYPE"


class InvalidQuantityError(RenovationInputError):
    code = "INVALID_QUANTITY"


class InvalidRatioError(RenovationInputError):
    code = "INVALID_RATIO"


class WorkValidationError(RenovationInputError):
    code = "VALIDATION_ERROR"


__all__ = [
    "RenovationInputError",
    "UnknownWorkTypeError",
    "InvalidQuantityError",
    "InvalidRatioError",
    "WorkValidationError",
]

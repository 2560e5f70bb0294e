"""
amount.py — Line-item amount calculator.

    amount = unit_price × quantity × Π(ratio / 100)

rounded half-up to whole yen. Category-agnostic: which ratios apply is decided
by the caller (deduction.py). An absent ratio (None) counts as 100.

All arithmetic is Decimal. Floats are converted through str() so that a
quantity of 12.3 stays 12.3 and does not become 12.2999999...
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from reformcert.engine.errors import InvalidQuantityError, InvalidRatioError

Number = Union[int, float, Decimal]

_HUNDRED = Decimal(100)


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_yen(value: Number) -> int:
    """Round to the nearest whole yen, halves away from zero."""
    return int(_to_decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _check_ratio(ratio: Number) -> Decimal:
    dec = _to_decimal(ratio)
    if not dec.is_finite() or dec < 0 or dec > _HUNDRED:
        raise InvalidRatioError(f"Ratio must be between 0 and 100, got {ratio}")
    return dec


def calculate_amount(unit_price: int, quantity: Number, *ratios: Optional[Number]) -> int:
    """
    Compute one line item's amount in yen.

    Raises:
        InvalidQuantityError: quantity is zero, negative or not finite.
        InvalidRatioError:    a supplied ratio lies outside [0, 100].
    """
    qty = _to_decimal(quantity)
    if not qty.is_finite() or qty <= 0:
        raise InvalidQuantityError(f"Quantity must be greater than 0, got {quantity}")

    # Multiply first, divide once: keeps the result independent of ratio order.
    amount = Decimal(unit_price) * qty
    divisor = Decimal(1)
    for ratio in ratios:
        if ratio is None:
            continue
        amount *= _check_ratio(ratio)
        divisor *= _HUNDRED

    return round_yen(amount / divisor)


__all__ = ["calculate_amount", "round_yen"]

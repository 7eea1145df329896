"""Decimal money helpers"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

CENT = Decimal("0.01")
ZERO = Decimal(0)


def to_decimal(value: Any) -> Optional[Decimal]:
    """
    Parse a record field into a Decimal.

    Floats go through str() so 0.1 stays 0.1. Returns None for missing,
    non-numeric, NaN or infinite input; callers decide whether to skip.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return None
    if not result.is_finite():
        return None
    return result


def round_money(value: Decimal) -> Decimal:
    """Round to the minor currency unit (cents)"""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def safe_ratio(numerator: Decimal, denominator: Decimal) -> Decimal:
    """numerator / denominator, or 0 when the denominator is 0"""
    if denominator == 0:
        return ZERO
    return numerator / denominator

"""Frequency normalization - converts recurring obligations to a monthly basis"""

from decimal import Decimal
from typing import Iterable, Optional
from wealth_gateway.domain.models import RecurringObligation
from wealth_gateway.utils.money import ZERO

# (multiplier, divisor) taking one payment to its monthly equivalent
_MONTHLY_FACTORS = {
    "weekly": (Decimal(52), Decimal(12)),
    "biweekly": (Decimal(26), Decimal(12)),
    "monthly": (Decimal(1), Decimal(1)),
    "quarterly": (Decimal(1), Decimal(3)),
    "annual": (Decimal(1), Decimal(12)),
}

_ALIASES = {"yearly": "annual", "bi-weekly": "biweekly"}

FREQUENCIES = tuple(_MONTHLY_FACTORS)


def canonical_frequency(frequency: Optional[str]) -> Optional[str]:
    """Lower-cased, alias-resolved frequency code, or None if unknown"""
    if not frequency or not isinstance(frequency, str):
        return None
    code = frequency.strip().lower()
    code = _ALIASES.get(code, code)
    return code if code in _MONTHLY_FACTORS else None


def normalize_monthly(amount: Optional[Decimal], frequency: Optional[str]) -> Decimal:
    """
    Monthly equivalent of a recurring amount.

    monthly -> amount, annual -> amount / 12, quarterly -> amount / 3,
    weekly -> amount * 52 / 12, biweekly -> amount * 26 / 12.
    Unknown frequencies and missing amounts normalize to 0.
    """
    code = canonical_frequency(frequency)
    if code is None or amount is None:
        return ZERO

    multiplier, divisor = _MONTHLY_FACTORS[code]
    if divisor == 1:
        return amount * multiplier
    return amount * multiplier / divisor


def annualize(amount: Optional[Decimal], frequency: Optional[str]) -> Decimal:
    """Yearly equivalent of a recurring amount"""
    code = canonical_frequency(frequency)
    if code is None or amount is None:
        return ZERO

    multiplier, divisor = _MONTHLY_FACTORS[code]
    # multiply before dividing so weekly 100 -> 5200 exactly
    return amount * multiplier * 12 / divisor


def monthly_total(obligations: Iterable[RecurringObligation]) -> Decimal:
    """Sum of monthly equivalents over active obligations"""
    return sum(
        (normalize_monthly(o.amount, o.frequency) for o in obligations if o.status == "active"),
        ZERO,
    )

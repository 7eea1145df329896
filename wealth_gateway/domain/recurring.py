"""Recurring obligations - detection from transaction history and upcoming due dates"""

from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List
from wealth_gateway.domain.models import DetectedObligation, RecurringObligation, Transaction
from wealth_gateway.utils.date_utils import within_window
from wealth_gateway.utils.money import round_money

INTERVAL_TOLERANCE_DAYS = 5


def frequency_for_interval(avg_interval_days: Decimal) -> str:
    """Map a mean payment interval to the nearest cadence"""
    if avg_interval_days <= 10:
        return "weekly"
    elif avg_interval_days <= 17:
        return "biweekly"
    elif avg_interval_days <= 35:
        return "monthly"
    elif avg_interval_days <= 100:
        return "quarterly"
    else:
        return "annual"


def _confidence(interval_count: int, amounts: List[Decimal], avg_amount: Decimal) -> int:
    interval_score = 90 if interval_count >= 3 else 70
    spread = max(amounts) - min(amounts)
    amount_score = 100 if spread < avg_amount * Decimal("0.1") else 80
    return int((Decimal(interval_score + amount_score) / 2).to_integral_value(rounding=ROUND_HALF_UP))


def detect_recurring(transactions: Iterable[Transaction]) -> List[DetectedObligation]:
    """
    Find merchants that charge on a steady cadence.

    Requirements:
    - Expenses only, grouped by merchant, at least 2 charges per merchant
    - Every interval between consecutive charges within 5 days of the mean interval
    - Frequency from the mean interval; next date = last charge + mean interval
    """
    by_merchant: Dict[str, List[Transaction]] = {}
    for txn in transactions:
        if txn.date is None or txn.amount is None or txn.amount >= 0 or not txn.merchant:
            continue
        by_merchant.setdefault(txn.merchant, []).append(txn)

    detected = []
    for merchant, charges in by_merchant.items():
        if len(charges) < 2:
            continue

        charges.sort(key=lambda t: t.date)
        intervals = [(b.date - a.date).days for a, b in zip(charges, charges[1:])]
        avg_interval = Decimal(sum(intervals)) / len(intervals)
        if any(abs(interval - avg_interval) > INTERVAL_TOLERANCE_DAYS for interval in intervals):
            continue

        amounts = [abs(t.amount) for t in charges]
        avg_amount = sum(amounts) / len(amounts)
        interval_days = int(avg_interval.to_integral_value(rounding=ROUND_HALF_UP))
        last = charges[-1]

        detected.append(
            DetectedObligation(
                merchant=merchant,
                amount=round_money(avg_amount),
                frequency=frequency_for_interval(avg_interval),
                category=charges[0].category or "other",
                transaction_count=len(charges),
                avg_interval_days=interval_days,
                confidence_score=_confidence(len(intervals), amounts, avg_amount),
                last_payment_date=last.date,
                last_amount=abs(last.amount),
                next_estimated_date=last.date + timedelta(days=interval_days),
            )
        )

    return detected


def upcoming_obligations(
    obligations: Iterable[RecurringObligation],
    as_of: date,
    within_days: int = 7,
) -> List[RecurringObligation]:
    """Active obligations due between as_of and as_of + within_days, soonest first"""
    due = [
        o
        for o in obligations
        if o.status == "active"
        and o.next_due_date is not None
        and within_window(o.next_due_date, as_of, within_days)
    ]
    return sorted(due, key=lambda o: o.next_due_date)

"""Period aggregation - income/expense/category split of a calendar period"""

import logging
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable
from wealth_gateway.domain.models import Transaction, PeriodTotals
from wealth_gateway.utils.money import ZERO


def aggregate_period(
    transactions: Iterable[Transaction],
    period_start: date,
    period_end: date,
) -> PeriodTotals:
    """
    Split transactions dated in [period_start, period_end) into income and expenses.

    Requirements:
    - Income is the sum of positive amounts
    - Expenses are the absolute value of the sum of negative amounts
    - Category spending groups expenses by category; blank categories still
      count toward expenses but get no bucket
    - Records without a date or amount are skipped and counted, never raised
    """
    income = ZERO
    negative_sum = ZERO
    category_spending: Dict[str, Decimal] = {}
    transaction_count = 0
    skipped = 0

    for txn in transactions:
        if txn.date is None or txn.amount is None:
            skipped += 1
            continue

        if not (period_start <= txn.date < period_end):
            continue

        transaction_count += 1
        if txn.amount > 0:
            income += txn.amount
        elif txn.amount < 0:
            negative_sum += txn.amount
            category = txn.category.strip() if isinstance(txn.category, str) else ""
            if category:
                category_spending[category] = category_spending.get(category, ZERO) + abs(txn.amount)

    if skipped:
        logging.debug(
            "Skipped malformed transactions",
            extra={"skipped_count": skipped, "period_start": period_start.isoformat()},
        )

    return PeriodTotals(
        income=income,
        expenses=abs(negative_sum),
        category_spending=category_spending,
        transaction_count=transaction_count,
        skipped_count=skipped,
    )

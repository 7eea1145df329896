"""Unit tests for recurring charge detection and upcoming obligations"""

import pytest
from datetime import date, timedelta
from decimal import Decimal
from wealth_gateway.domain.models import RecurringObligation, Transaction
from wealth_gateway.domain.recurring import detect_recurring, frequency_for_interval, upcoming_obligations


def _charges(merchant: str, start: date, every_days: int, amounts: list[str], category="entertainment"):
    return [
        Transaction(
            date=start + timedelta(days=every_days * i),
            amount=-Decimal(a),
            merchant=merchant,
            category=category,
        )
        for i, a in enumerate(amounts)
    ]


def test_detects_monthly_subscription():
    transactions = _charges("Netflix", date(2026, 7, 1), 30, ["15.99", "15.99", "15.99"])

    detected = detect_recurring(transactions)

    assert len(detected) == 1
    netflix = detected[0]
    assert netflix.frequency == "monthly"
    assert netflix.amount == Decimal("15.99")
    assert netflix.transaction_count == 3
    assert netflix.avg_interval_days == 30
    assert netflix.confidence_score == 85
    assert netflix.last_payment_date == date(2026, 8, 30)
    assert netflix.next_estimated_date == date(2026, 9, 29)


def test_weekly_with_many_intervals_scores_higher():
    transactions = _charges("Gym", date(2026, 9, 1), 7, ["12", "12", "12", "12"], category="fitness")

    detected = detect_recurring(transactions)

    assert detected[0].frequency == "weekly"
    assert detected[0].confidence_score == 95
    assert detected[0].category == "fitness"


def test_varying_amounts_lower_confidence():
    transactions = _charges("Power Co", date(2026, 6, 3), 31, ["80", "100", "120"], category=None)

    detected = detect_recurring(transactions)

    assert detected[0].confidence_score == 75
    assert detected[0].category == "other"
    assert detected[0].amount == Decimal("100.00")


def test_irregular_merchant_is_ignored():
    transactions = [
        Transaction(date=date(2026, 9, 1), amount=Decimal("-20"), merchant="Cafe"),
        Transaction(date=date(2026, 9, 6), amount=Decimal("-20"), merchant="Cafe"),
        Transaction(date=date(2026, 10, 16), amount=Decimal("-20"), merchant="Cafe"),
    ]

    assert detect_recurring(transactions) == []


def test_single_charges_and_income_are_ignored():
    transactions = [
        Transaction(date=date(2026, 9, 1), amount=Decimal("-20"), merchant="Once"),
        Transaction(date=date(2026, 9, 1), amount=Decimal("3000"), merchant="Employer"),
        Transaction(date=date(2026, 10, 1), amount=Decimal("3000"), merchant="Employer"),
        Transaction(date=None, amount=Decimal("-5"), merchant="Broken"),
    ]

    assert detect_recurring(transactions) == []


@pytest.mark.parametrize(
    "days, frequency",
    [(7, "weekly"), (14, "biweekly"), (30, "monthly"), (91, "quarterly"), (365, "annual")],
)
def test_frequency_for_interval(days: int, frequency: str):
    assert frequency_for_interval(Decimal(days)) == frequency


def test_upcoming_obligations_window_and_order():
    as_of = date(2026, 10, 18)
    obligations = [
        RecurringObligation(amount=Decimal("50"), frequency="monthly", name="Phone", next_due_date=date(2026, 10, 25)),
        RecurringObligation(amount=Decimal("90"), frequency="monthly", name="Water", next_due_date=date(2026, 10, 18)),
        RecurringObligation(amount=Decimal("10"), frequency="monthly", name="Late", next_due_date=date(2026, 10, 26)),
        RecurringObligation(amount=Decimal("10"), frequency="monthly", name="Past", next_due_date=date(2026, 10, 17)),
        RecurringObligation(
            amount=Decimal("10"),
            frequency="monthly",
            name="Paused",
            status="inactive",
            next_due_date=date(2026, 10, 20),
        ),
        RecurringObligation(amount=Decimal("10"), frequency="monthly", name="Undated"),
    ]

    upcoming = upcoming_obligations(obligations, as_of)

    assert [o.name for o in upcoming] == ["Water", "Phone"]

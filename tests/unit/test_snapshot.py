"""Unit tests for the snapshot builder"""

from datetime import date
from decimal import Decimal
from wealth_gateway.domain.models import FinancialRecords, Transaction
from wealth_gateway.domain.snapshot import build_snapshot


def test_end_to_end_current_month(sample_records: FinancialRecords, as_of: date):
    """Test headline figures for one month of activity"""
    snapshot = build_snapshot(sample_records, as_of)

    assert snapshot.period_start == date(2026, 10, 1)
    assert snapshot.period_end == date(2026, 11, 1)
    assert snapshot.monthly_income == Decimal("5000")
    assert snapshot.monthly_expenses == Decimal("1500")
    assert snapshot.net_savings == Decimal("3500")
    assert snapshot.savings_rate == Decimal("0.7")
    assert snapshot.category_spending == {"rent": Decimal("1200"), "groceries": Decimal("300")}
    assert snapshot.skipped_records == 0


def test_budget_rows(sample_records: FinancialRecords, as_of: date):
    snapshot = build_snapshot(sample_records, as_of)

    rent, groceries = snapshot.budget_status
    assert rent.percentage == Decimal("100")
    assert rent.state == "warning"
    assert groceries.percentage == Decimal("75")
    assert groceries.state == "good"
    assert snapshot.budget_summary.total_limit == Decimal("1600")
    assert snapshot.budget_summary.warning_categories == ["rent"]


def test_recurring_totals_and_debt_ratio(sample_records: FinancialRecords, as_of: date):
    """Test inactive bills are excluded and cadences are normalized"""
    snapshot = build_snapshot(sample_records, as_of)

    assert snapshot.monthly_bills == Decimal("150")
    assert snapshot.monthly_subscriptions == Decimal("10")
    assert snapshot.monthly_recurring_total == Decimal("160")
    assert snapshot.annual_recurring_total == Decimal("1920")
    assert snapshot.debt_to_income_ratio == Decimal("0.032")


def test_investments(sample_records: FinancialRecords, as_of: date):
    snapshot = build_snapshot(sample_records, as_of)

    assert snapshot.investment_value == Decimal("15000")
    assert snapshot.investment_cost_basis == Decimal("12500")
    assert snapshot.investment_return == Decimal("0.2")
    assert snapshot.holdings_count == 2


def test_goals_and_upcoming(sample_records: FinancialRecords, as_of: date):
    snapshot = build_snapshot(sample_records, as_of)

    assert [g.title for g in snapshot.goals_analysis] == ["Emergency fund"]
    assert [o.name for o in snapshot.upcoming_obligations] == ["Electricity"]


def test_empty_records_have_zero_ratios(as_of: date):
    """Test no income and no cost basis yield 0 ratios, not errors"""
    snapshot = build_snapshot(FinancialRecords(), as_of)

    assert snapshot.savings_rate == 0
    assert snapshot.debt_to_income_ratio == 0
    assert snapshot.investment_return == 0
    assert snapshot.budget_status == []
    assert snapshot.goals_analysis == []


def test_skipped_records_are_reported(as_of: date):
    records = FinancialRecords(
        transactions=[
            Transaction(date=None, amount=Decimal("-10")),
            Transaction(date=as_of, amount=Decimal("100")),
        ]
    )

    snapshot = build_snapshot(records, as_of)

    assert snapshot.skipped_records == 1
    assert snapshot.monthly_income == Decimal("100")

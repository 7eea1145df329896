"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from fastapi.testclient import TestClient
from wealth_gateway.api.main import create_app
from wealth_gateway.domain.models import (
    Budget,
    FinancialGoal,
    FinancialRecords,
    Investment,
    RecurringObligation,
    Transaction,
)

AS_OF = date(2026, 10, 18)


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def as_of() -> date:
    """Fixed reference day so month boundaries are deterministic"""
    return AS_OF


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """One month of income and spending plus a stray record from the previous month"""
    return [
        Transaction(date=date(2026, 10, 1), amount=Decimal("5000"), category="salary", merchant="Employer"),
        Transaction(date=date(2026, 10, 5), amount=Decimal("-1200"), category="rent", merchant="Landlord"),
        Transaction(date=date(2026, 10, 10), amount=Decimal("-300"), category="groceries", merchant="Market"),
        Transaction(date=date(2026, 9, 28), amount=Decimal("-75"), category="groceries", merchant="Market"),
    ]


@pytest.fixture
def sample_records(sample_transactions: list[Transaction]) -> FinancialRecords:
    """Complete record set for one user"""
    return FinancialRecords(
        transactions=sample_transactions,
        budgets=[
            Budget(category="rent", amount=Decimal("1200")),
            Budget(category="groceries", amount=Decimal("400")),
        ],
        goals=[
            FinancialGoal(
                title="Emergency fund",
                target_amount=Decimal("12000"),
                current_amount=Decimal("6000"),
                target_date=date(2027, 4, 18),
                monthly_contribution=Decimal("1000"),
            ),
            FinancialGoal(
                title="Old plan",
                target_amount=Decimal("5000"),
                status="abandoned",
            ),
        ],
        investments=[
            Investment(current_value=Decimal("12000"), cost_basis=Decimal("10000"), asset_type="stock"),
            Investment(current_value=Decimal("3000"), cost_basis=Decimal("2500"), asset_type="bond"),
        ],
        bills=[
            RecurringObligation(
                amount=Decimal("150"),
                frequency="monthly",
                name="Electricity",
                next_due_date=date(2026, 10, 20),
            ),
            RecurringObligation(amount=Decimal("1200"), frequency="annual", name="Insurance", status="inactive"),
        ],
        subscriptions=[
            RecurringObligation(
                amount=Decimal("120"),
                frequency="annual",
                name="Cloud storage",
                kind="subscription",
                next_due_date=date(2026, 12, 1),
            ),
        ],
    )

"""Domain models - pure Python dataclasses representing financial records and derived metrics"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional


@dataclass
class Transaction:
    """Dated ledger entry read from the entity store"""

    date: Optional[date]
    amount: Optional[Decimal]  # positive = income, negative = expense
    category: Optional[str] = None
    merchant: Optional[str] = None
    description: Optional[str] = None


@dataclass
class RecurringObligation:
    """Bill or subscription with a fixed amount and cadence"""

    amount: Optional[Decimal]
    frequency: Optional[str]  # weekly | biweekly | monthly | quarterly | annual
    status: str = "active"
    name: Optional[str] = None
    next_due_date: Optional[date] = None
    kind: str = "bill"  # bill | subscription


@dataclass
class Budget:
    """Spending ceiling for one category"""

    category: str
    amount: Decimal
    alert_threshold: Optional[Decimal] = None  # percent of ceiling that triggers "warning"


@dataclass
class FinancialGoal:
    """Savings goal with a target date and a planned monthly contribution"""

    title: str
    target_amount: Decimal
    current_amount: Decimal = Decimal(0)
    target_date: Optional[date] = None
    monthly_contribution: Decimal = Decimal(0)
    status: str = "active"  # active | completed | abandoned
    goal_type: Optional[str] = None


@dataclass
class Investment:
    """Single holding"""

    current_value: Decimal
    cost_basis: Decimal
    asset_type: Optional[str] = None
    name: Optional[str] = None


@dataclass
class FinancialRecords:
    """Already-fetched entity set for one user"""

    transactions: List[Transaction] = field(default_factory=list)
    budgets: List[Budget] = field(default_factory=list)
    goals: List[FinancialGoal] = field(default_factory=list)
    investments: List[Investment] = field(default_factory=list)
    bills: List[RecurringObligation] = field(default_factory=list)
    subscriptions: List[RecurringObligation] = field(default_factory=list)


@dataclass
class PeriodTotals:
    """Income/expense split of the transactions inside one period"""

    income: Decimal
    expenses: Decimal
    category_spending: Dict[str, Decimal]
    transaction_count: int
    skipped_count: int


@dataclass
class BudgetStatus:
    """Spending against one budget ceiling"""

    category: str
    budget: Decimal
    spent: Decimal
    remaining: Decimal
    percentage: Decimal  # Decimal("Infinity") when the ceiling is 0 and spent > 0
    state: str  # good | warning | over


@dataclass
class BudgetSummary:
    """Totals across all budget rows"""

    total_limit: Decimal
    total_spent: Decimal
    total_remaining: Decimal
    overall_percentage: Decimal
    over_budget_categories: List[str]
    warning_categories: List[str]


@dataclass
class GoalAnalysis:
    """Trajectory of one goal as of a given date"""

    title: str
    goal_type: Optional[str]
    current_amount: Decimal
    target_amount: Decimal
    monthly_contribution: Decimal
    progress_pct: Decimal
    months_remaining: Decimal
    required_monthly: Decimal
    on_track: bool
    overdue: bool
    progress_tier: str
    projected_completion_date: Optional[date]  # None = never reached at the current contribution
    months_to_complete: Optional[int]

    @property
    def completion_reachable(self) -> bool:
        return self.projected_completion_date is not None


@dataclass
class FinancialSnapshot:
    """Derived metrics recomputed from source records on every request"""

    as_of: date
    period_start: date
    period_end: date
    monthly_income: Decimal
    monthly_expenses: Decimal
    net_savings: Decimal
    savings_rate: Decimal  # fraction of income
    category_spending: Dict[str, Decimal]
    budget_status: List[BudgetStatus]
    budget_summary: BudgetSummary
    monthly_bills: Decimal
    monthly_subscriptions: Decimal
    monthly_recurring_total: Decimal
    annual_recurring_total: Decimal
    debt_to_income_ratio: Decimal  # fraction of income
    investment_value: Decimal
    investment_cost_basis: Decimal
    investment_return: Decimal  # fraction of cost basis
    holdings_count: int
    goals_analysis: List[GoalAnalysis]
    upcoming_obligations: List[RecurringObligation]
    skipped_records: int


@dataclass
class Scenario:
    """What-if deltas applied on top of the baseline; None means no change"""

    monthly_income: Optional[Decimal] = None
    monthly_savings_increase: Optional[Decimal] = None
    investment_return_rate: Optional[Decimal] = None  # percentage points
    expense_reduction: Optional[Decimal] = None
    one_time_windfall: Optional[Decimal] = None
    major_expense: Optional[Decimal] = None
    major_expense_year: Optional[int] = None
    monthly_investment_contribution: Optional[Decimal] = None


@dataclass
class ProjectionAssumptions:
    """Neutral baseline the scenario deltas are applied to"""

    annual_return_pct: Decimal = Decimal(7)
    inflation_pct: Decimal = Decimal(2)


@dataclass
class Projection:
    """Projected position at one horizon, rounded to cents"""

    horizon_years: int
    months: int
    monthly_surplus: Decimal
    investment_value: Decimal
    total_saved: Decimal
    windfall_applied: Decimal
    major_expense_applied: Decimal
    net_worth: Decimal
    real_net_worth: Decimal  # net worth in today's money


@dataclass
class DetectedObligation:
    """Recurring expense inferred from transaction history"""

    merchant: str
    amount: Decimal
    frequency: str
    category: str
    transaction_count: int
    avg_interval_days: int
    confidence_score: int
    last_payment_date: date
    last_amount: Decimal
    next_estimated_date: date


@dataclass
class ForecastBaseline:
    """Minimal current position the projector needs when no full snapshot is at hand"""

    monthly_income: Decimal
    monthly_expenses: Decimal
    investment_value: Decimal = Decimal(0)

"""Pydantic schemas for API request/response validation"""

import datetime
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, conint

from wealth_gateway.domain.frequency import normalize_monthly
from wealth_gateway.domain.models import (
    Budget,
    BudgetStatus,
    BudgetSummary,
    DetectedObligation,
    FinancialGoal,
    FinancialRecords,
    FinancialSnapshot,
    GoalAnalysis,
    Investment,
    Projection,
    RecurringObligation,
    Scenario,
    Transaction,
)
from wealth_gateway.infrastructure.clients.advisor import AdviceReport
from wealth_gateway.utils.money import round_money


def money_out(value: Decimal) -> float:
    """Cents-rounded amount as a JSON number"""
    return float(round_money(value))


def ratio_out(value: Decimal) -> float:
    return float(value.quantize(Decimal("0.0001"), rounding=ROUND_HALF_UP))


def percent_out(value: Decimal) -> Optional[float]:
    """Percentage with two decimals; None when unbounded"""
    if not value.is_finite():
        return None
    return float(value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


# Requests


class TransactionIn(BaseModel):
    """Transaction record; date or amount may be missing on malformed records"""

    date: Optional[datetime.date] = None
    amount: Optional[Decimal] = None
    category: Optional[str] = None
    merchant: Optional[str] = None
    description: Optional[str] = None

    def to_domain(self) -> Transaction:
        return Transaction(
            date=self.date,
            amount=self.amount,
            category=self.category,
            merchant=self.merchant,
            description=self.description,
        )


class BudgetIn(BaseModel):
    category: str = Field(..., min_length=1)
    amount: Decimal = Field(..., ge=0, description="Spending ceiling for the period")
    alert_threshold: Optional[Decimal] = Field(None, ge=0, description="Warning threshold in percent")

    def to_domain(self) -> Budget:
        return Budget(category=self.category, amount=self.amount, alert_threshold=self.alert_threshold)


class GoalIn(BaseModel):
    title: str = Field(..., min_length=1)
    target_amount: Decimal
    current_amount: Decimal = Decimal(0)
    target_date: Optional[date] = None
    monthly_contribution: Decimal = Decimal(0)
    status: str = "active"
    goal_type: Optional[str] = None

    def to_domain(self) -> FinancialGoal:
        return FinancialGoal(
            title=self.title,
            target_amount=self.target_amount,
            current_amount=self.current_amount,
            target_date=self.target_date,
            monthly_contribution=self.monthly_contribution,
            status=self.status,
            goal_type=self.goal_type,
        )


class InvestmentIn(BaseModel):
    current_value: Decimal = Decimal(0)
    cost_basis: Decimal = Decimal(0)
    asset_type: Optional[str] = None
    name: Optional[str] = None

    def to_domain(self) -> Investment:
        return Investment(
            current_value=self.current_value,
            cost_basis=self.cost_basis,
            asset_type=self.asset_type,
            name=self.name,
        )


class ObligationIn(BaseModel):
    """Bill or subscription"""

    amount: Optional[Decimal] = None
    frequency: Optional[str] = None
    status: str = "active"
    name: Optional[str] = None
    next_due_date: Optional[date] = None

    def to_domain(self, kind: str) -> RecurringObligation:
        return RecurringObligation(
            amount=self.amount,
            frequency=self.frequency,
            status=self.status,
            name=self.name,
            next_due_date=self.next_due_date,
            kind=kind,
        )


class SnapshotRequest(BaseModel):
    """Request body for POST /v1/snapshot"""

    as_of: Optional[date] = Field(None, description="Reference day; defaults to today")
    transactions: List[TransactionIn] = Field(default_factory=list)
    budgets: List[BudgetIn] = Field(default_factory=list)
    goals: List[GoalIn] = Field(default_factory=list)
    investments: List[InvestmentIn] = Field(default_factory=list)
    bills: List[ObligationIn] = Field(default_factory=list)
    subscriptions: List[ObligationIn] = Field(default_factory=list)

    def to_records(self) -> FinancialRecords:
        return FinancialRecords(
            transactions=[t.to_domain() for t in self.transactions],
            budgets=[b.to_domain() for b in self.budgets],
            goals=[g.to_domain() for g in self.goals],
            investments=[i.to_domain() for i in self.investments],
            bills=[b.to_domain("bill") for b in self.bills],
            subscriptions=[s.to_domain("subscription") for s in self.subscriptions],
        )


class ScenarioIn(BaseModel):
    """What-if deltas; omitted fields leave the baseline unchanged"""

    monthly_income: Optional[Decimal] = Field(None, description="Added to baseline monthly income")
    monthly_savings_increase: Optional[Decimal] = None
    investment_return_rate: Optional[Decimal] = Field(None, description="Percentage points added to the baseline return")
    expense_reduction: Optional[Decimal] = None
    one_time_windfall: Optional[Decimal] = None
    major_expense: Optional[Decimal] = None
    major_expense_year: Optional[int] = Field(None, ge=1)
    monthly_investment_contribution: Optional[Decimal] = None

    def to_domain(self) -> Scenario:
        return Scenario(**self.model_dump())


class ForecastOptions(BaseModel):
    """Scenario and assumptions shared by both forecast endpoints"""

    scenario: ScenarioIn = Field(default_factory=ScenarioIn)
    horizons_years: Optional[List[conint(ge=0, le=100)]] = Field(
        None, description="Defaults to the configured horizons"
    )
    yearly_years: int = Field(10, ge=0, le=50, description="Length of the year-by-year series")
    annual_return_pct: Optional[Decimal] = Field(None, gt=-1200, description="Baseline annual return in percent")
    inflation_pct: Optional[Decimal] = Field(None, gt=-100, description="Annual inflation in percent")


class ForecastRequest(ForecastOptions):
    """Request body for POST /v1/forecast"""

    monthly_income: Decimal
    monthly_expenses: Decimal
    investment_value: Decimal = Decimal(0)


class UserForecastRequest(ForecastOptions):
    """Request body for POST /v1/users/{user_id}/forecast"""

    as_of: Optional[date] = Field(None, description="Reference day for the baseline month; defaults to today")


class GoalsRequest(BaseModel):
    """Request body for POST /v1/goals/evaluate"""

    as_of: Optional[date] = None
    goals: List[GoalIn]
    calendar_months: Optional[bool] = None


class RecurringDetectRequest(BaseModel):
    """Request body for POST /v1/recurring/detect"""

    transactions: List[TransactionIn]


class AdviceRequest(BaseModel):
    """Request body for POST /v1/advice"""

    user_id: str = Field(..., min_length=1, description="User identifier")
    advice_type: Optional[str] = None
    as_of: Optional[date] = None


# Responses


class BudgetStatusSchema(BaseModel):
    category: str
    budget: float
    spent: float
    remaining: float
    percentage: Optional[float] = Field(None, description="null when the ceiling is 0 and money was spent")
    state: str

    @classmethod
    def from_domain(cls, status: BudgetStatus) -> "BudgetStatusSchema":
        return cls(
            category=status.category,
            budget=money_out(status.budget),
            spent=money_out(status.spent),
            remaining=money_out(status.remaining),
            percentage=percent_out(status.percentage),
            state=status.state,
        )


class BudgetSummarySchema(BaseModel):
    total_limit: float
    total_spent: float
    total_remaining: float
    overall_percentage: Optional[float]
    over_budget_categories: List[str]
    warning_categories: List[str]

    @classmethod
    def from_domain(cls, summary: BudgetSummary) -> "BudgetSummarySchema":
        return cls(
            total_limit=money_out(summary.total_limit),
            total_spent=money_out(summary.total_spent),
            total_remaining=money_out(summary.total_remaining),
            overall_percentage=percent_out(summary.overall_percentage),
            over_budget_categories=summary.over_budget_categories,
            warning_categories=summary.warning_categories,
        )


class GoalAnalysisSchema(BaseModel):
    title: str
    goal_type: Optional[str] = None
    current_amount: float
    target_amount: float
    monthly_contribution: float
    progress_pct: float
    months_remaining: float
    required_monthly: float
    on_track: bool
    overdue: bool
    progress_tier: str
    projected_completion_date: Optional[date] = None
    months_to_complete: Optional[int] = None
    completion_reachable: bool

    @classmethod
    def from_domain(cls, analysis: GoalAnalysis) -> "GoalAnalysisSchema":
        return cls(
            title=analysis.title,
            goal_type=analysis.goal_type,
            current_amount=money_out(analysis.current_amount),
            target_amount=money_out(analysis.target_amount),
            monthly_contribution=money_out(analysis.monthly_contribution),
            progress_pct=percent_out(analysis.progress_pct),
            months_remaining=float(analysis.months_remaining.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)),
            required_monthly=money_out(analysis.required_monthly),
            on_track=analysis.on_track,
            overdue=analysis.overdue,
            progress_tier=analysis.progress_tier,
            projected_completion_date=analysis.projected_completion_date,
            months_to_complete=analysis.months_to_complete,
            completion_reachable=analysis.completion_reachable,
        )


class ObligationSchema(BaseModel):
    name: Optional[str] = None
    kind: str
    amount: Optional[float] = None
    frequency: Optional[str] = None
    monthly_amount: float
    next_due_date: Optional[date] = None

    @classmethod
    def from_domain(cls, obligation: RecurringObligation) -> "ObligationSchema":
        return cls(
            name=obligation.name,
            kind=obligation.kind,
            amount=money_out(obligation.amount) if obligation.amount is not None else None,
            frequency=obligation.frequency,
            monthly_amount=money_out(normalize_monthly(obligation.amount, obligation.frequency)),
            next_due_date=obligation.next_due_date,
        )


class SnapshotResponse(BaseModel):
    """Financial snapshot for the calendar month containing as_of"""

    as_of: date
    period_start: date
    period_end: date
    monthly_income: float
    monthly_expenses: float
    net_savings: float
    savings_rate: float
    category_spending: Dict[str, float]
    budget_status: List[BudgetStatusSchema]
    budget_summary: BudgetSummarySchema
    monthly_bills: float
    monthly_subscriptions: float
    monthly_recurring_total: float
    annual_recurring_total: float
    debt_to_income_ratio: float
    investment_value: float
    investment_cost_basis: float
    investment_return: float
    holdings_count: int
    goals_analysis: List[GoalAnalysisSchema]
    upcoming_obligations: List[ObligationSchema]
    skipped_records: int

    @classmethod
    def from_domain(cls, snapshot: FinancialSnapshot) -> "SnapshotResponse":
        return cls(
            as_of=snapshot.as_of,
            period_start=snapshot.period_start,
            period_end=snapshot.period_end,
            monthly_income=money_out(snapshot.monthly_income),
            monthly_expenses=money_out(snapshot.monthly_expenses),
            net_savings=money_out(snapshot.net_savings),
            savings_rate=ratio_out(snapshot.savings_rate),
            category_spending={k: money_out(v) for k, v in snapshot.category_spending.items()},
            budget_status=[BudgetStatusSchema.from_domain(b) for b in snapshot.budget_status],
            budget_summary=BudgetSummarySchema.from_domain(snapshot.budget_summary),
            monthly_bills=money_out(snapshot.monthly_bills),
            monthly_subscriptions=money_out(snapshot.monthly_subscriptions),
            monthly_recurring_total=money_out(snapshot.monthly_recurring_total),
            annual_recurring_total=money_out(snapshot.annual_recurring_total),
            debt_to_income_ratio=ratio_out(snapshot.debt_to_income_ratio),
            investment_value=money_out(snapshot.investment_value),
            investment_cost_basis=money_out(snapshot.investment_cost_basis),
            investment_return=ratio_out(snapshot.investment_return),
            holdings_count=snapshot.holdings_count,
            goals_analysis=[GoalAnalysisSchema.from_domain(g) for g in snapshot.goals_analysis],
            upcoming_obligations=[ObligationSchema.from_domain(o) for o in snapshot.upcoming_obligations],
            skipped_records=snapshot.skipped_records,
        )


class ProjectionSchema(BaseModel):
    horizon_years: int
    months: int
    monthly_surplus: float
    investment_value: float
    total_saved: float
    windfall_applied: float
    major_expense_applied: float
    net_worth: float
    real_net_worth: float

    @classmethod
    def from_domain(cls, projection: Projection) -> "ProjectionSchema":
        return cls(
            horizon_years=projection.horizon_years,
            months=projection.months,
            monthly_surplus=float(projection.monthly_surplus),
            investment_value=float(projection.investment_value),
            total_saved=float(projection.total_saved),
            windfall_applied=float(projection.windfall_applied),
            major_expense_applied=float(projection.major_expense_applied),
            net_worth=float(projection.net_worth),
            real_net_worth=float(projection.real_net_worth),
        )


class MilestoneSchema(BaseModel):
    threshold: float
    year: Optional[int] = Field(None, description="First projected year at or above the threshold")


class ForecastResponse(BaseModel):
    """Response for POST /v1/forecast"""

    projections: List[ProjectionSchema]
    yearly: List[ProjectionSchema]
    milestones: List[MilestoneSchema]


class UserForecastResponse(ForecastResponse):
    """Response for POST /v1/users/{user_id}/forecast: the baseline month plus its projections"""

    user_id: str
    as_of: date
    monthly_income: float
    monthly_expenses: float
    investment_value: float
    goals_analysis: List[GoalAnalysisSchema]


class GoalsResponse(BaseModel):
    as_of: date
    goals: List[GoalAnalysisSchema]


class DetectedObligationSchema(BaseModel):
    merchant: str
    amount: float
    frequency: str
    monthly_amount: float
    category: str
    transaction_count: int
    avg_interval_days: int
    confidence_score: int
    last_payment_date: date
    last_amount: float
    next_estimated_date: date

    @classmethod
    def from_domain(cls, detected: DetectedObligation) -> "DetectedObligationSchema":
        return cls(
            merchant=detected.merchant,
            amount=money_out(detected.amount),
            frequency=detected.frequency,
            monthly_amount=money_out(normalize_monthly(detected.amount, detected.frequency)),
            category=detected.category,
            transaction_count=detected.transaction_count,
            avg_interval_days=detected.avg_interval_days,
            confidence_score=detected.confidence_score,
            last_payment_date=detected.last_payment_date,
            last_amount=money_out(detected.last_amount),
            next_estimated_date=detected.next_estimated_date,
        )


class RecurringDetectResponse(BaseModel):
    recurring: List[DetectedObligationSchema]


class AdviceResponse(BaseModel):
    """Response for POST /v1/advice"""

    user_id: str
    snapshot: SnapshotResponse
    advice: AdviceReport

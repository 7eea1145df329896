"""Advice service client with exponential backoff retry and response validation"""

import asyncio
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional
import httpx
from pydantic import BaseModel, Field, ValidationError, field_validator
from wealth_gateway.config import settings
from wealth_gateway.domain.exceptions import AdvisorError
from wealth_gateway.domain.models import FinancialSnapshot
from wealth_gateway.infrastructure.observability.metrics import advisor_latency_histogram, advisor_failure_counter

PLACEHOLDER = "Not available"


def _score_or_none(value: Optional[float]) -> Optional[float]:
    # scores outside 1-10 are treated as missing
    if value is None or not 1 <= value <= 10:
        return None
    return value


class BudgetingAdvice(BaseModel):
    current_status: str = PLACEHOLDER
    recommendations: List[str] = Field(default_factory=list)
    spending_red_flags: List[str] = Field(default_factory=list)
    optimization_opportunities: List[str] = Field(default_factory=list)


class InvestmentAdvice(BaseModel):
    portfolio_assessment: str = PLACEHOLDER
    strategy_recommendations: List[str] = Field(default_factory=list)
    risk_analysis: str = PLACEHOLDER
    diversification_score: Optional[float] = None

    @field_validator("diversification_score")
    @classmethod
    def check_score(cls, value: Optional[float]) -> Optional[float]:
        return _score_or_none(value)


class DebtManagement(BaseModel):
    current_status: str = PLACEHOLDER
    recommendations: List[str] = Field(default_factory=list)
    priority_payments: List[str] = Field(default_factory=list)


class GoalsCoaching(BaseModel):
    overall_progress: str = PLACEHOLDER
    recommendations: List[str] = Field(default_factory=list)
    timeline_adjustments: List[str] = Field(default_factory=list)


class SavingsStrategy(BaseModel):
    recommended_savings_rate: Optional[float] = None
    emergency_fund_status: str = PLACEHOLDER
    automated_savings_plan: str = PLACEHOLDER


class ActionPlan(BaseModel):
    immediate_actions: List[str] = Field(default_factory=list)
    short_term_actions: List[str] = Field(default_factory=list)
    long_term_actions: List[str] = Field(default_factory=list)


class AdviceReport(BaseModel):
    """
    Advice payload returned by the hosted model.

    Treated as untrusted external data: every field has a placeholder default
    so a partial response still renders.
    """

    financial_health_score: Optional[float] = None
    health_assessment: str = PLACEHOLDER
    budgeting_advice: BudgetingAdvice = Field(default_factory=BudgetingAdvice)
    investment_advice: InvestmentAdvice = Field(default_factory=InvestmentAdvice)
    debt_management: DebtManagement = Field(default_factory=DebtManagement)
    goals_coaching: GoalsCoaching = Field(default_factory=GoalsCoaching)
    savings_strategy: SavingsStrategy = Field(default_factory=SavingsStrategy)
    action_plan: ActionPlan = Field(default_factory=ActionPlan)
    estimated_impact: Optional[float] = None

    @field_validator("financial_health_score")
    @classmethod
    def check_score(cls, value: Optional[float]) -> Optional[float]:
        return _score_or_none(value)


def _money(value: Decimal) -> str:
    return f"${value:,.2f}"


def _pct(fraction: Decimal) -> str:
    return f"{fraction * 100:.1f}%"


def build_advice_context(snapshot: FinancialSnapshot, advice_type: str | None = None) -> str:
    """Render the snapshot figures as the prompt context sent to the advice service"""
    lines = [
        "You are a professional financial advisor. Provide comprehensive, personalized financial advice.",
        "",
        "CLIENT FINANCIAL PROFILE:",
        f"Monthly Income: {_money(snapshot.monthly_income)}",
        f"Monthly Expenses: {_money(snapshot.monthly_expenses)}",
        f"Net Savings: {_money(snapshot.net_savings)}",
        f"Savings Rate: {_pct(snapshot.savings_rate)}",
        "",
        f"Monthly Bills: {_money(snapshot.monthly_bills)}",
        f"Monthly Subscriptions: {_money(snapshot.monthly_subscriptions)}",
        f"Debt-to-Income Ratio: {_pct(snapshot.debt_to_income_ratio)}",
        "",
        "Investment Portfolio:",
        f"- Total Value: {_money(snapshot.investment_value)}",
        f"- Total Return: {_pct(snapshot.investment_return)}",
        f"- Number of Holdings: {snapshot.holdings_count}",
        "",
        "Budget Status:",
    ]
    for b in snapshot.budget_status:
        percentage = "no limit set" if not b.percentage.is_finite() else f"{b.percentage:.0f}%"
        lines.append(f"- {b.category}: {_money(b.spent)} / {_money(b.budget)} ({percentage})")

    lines += ["", f"Active Financial Goals ({len(snapshot.goals_analysis)}):"]
    for g in snapshot.goals_analysis:
        lines.append(
            f"- {g.title}: {g.progress_pct:.1f}% complete, needs {_money(g.required_monthly)}/month "
            f"(currently {_money(g.monthly_contribution)}/month)"
        )

    lines += ["", "Category Spending:"]
    for category, amount in snapshot.category_spending.items():
        lines.append(f"- {category}: {_money(amount)}")

    lines += ["", f"ADVICE REQUEST: {advice_type or 'comprehensive financial review'}"]
    return "\n".join(lines)


class AdvisorClient:
    """Client for the hosted advice-generation service"""

    def __init__(
        self,
        advisor_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.advisor_url = advisor_url or settings.advisor_url
        self.timeout = settings.advisor_timeout_seconds
        self.max_retries = settings.advisor_max_retries
        self.backoff_base = settings.advisor_backoff_base
        self.transport = transport

    async def _post_with_retry(self, payload: Dict[str, Any]) -> Any:
        """
        POST the advice request with retry logic.

        Retry strategy:
        - Exponential backoff: base * 2^(attempt-1) seconds
        - Retries on 5xx errors and network failures; 4xx fails immediately
        - Tracks latency histogram and failure counter
        """
        attempt = 0
        async with httpx.AsyncClient(transport=self.transport) as client:
            while True:
                try:
                    with advisor_latency_histogram.time():
                        response = await client.post(self.advisor_url, json=payload, timeout=self.timeout)
                        response.raise_for_status()
                        return response.json()

                except httpx.HTTPStatusError as e:
                    advisor_failure_counter.inc()
                    if e.response.status_code < 500:
                        raise AdvisorError(f"Advice service rejected request: {e.response.status_code}") from e
                    attempt += 1
                    if attempt >= self.max_retries:
                        raise AdvisorError(f"Advice service error: {e.response.status_code}") from e

                except httpx.RequestError as e:
                    advisor_failure_counter.inc()
                    attempt += 1
                    if attempt >= self.max_retries:
                        raise AdvisorError(f"Advice service unreachable: {e}") from e

                except ValueError as e:
                    advisor_failure_counter.inc()
                    raise AdvisorError(f"Advice service returned invalid JSON: {e}") from e

                backoff = self.backoff_base * (2 ** (attempt - 1))
                logging.warning(
                    "Retrying advice request",
                    extra={"attempt": attempt, "backoff_seconds": backoff},
                )
                await asyncio.sleep(backoff)

    async def request_advice(self, snapshot: FinancialSnapshot, advice_type: str | None = None) -> AdviceReport:
        """
        Ask the advice service about a snapshot and validate what comes back.

        Raises:
            AdvisorError: On exhausted retries, client errors, or a payload that is not an advice object
        """
        payload = {
            "prompt": build_advice_context(snapshot, advice_type),
            "response_json_schema": AdviceReport.model_json_schema(),
        }
        data = await self._post_with_retry(payload)

        # Some gateways wrap the model output
        if isinstance(data, dict) and isinstance(data.get("advice"), dict):
            data = data["advice"]
        if not isinstance(data, dict):
            raise AdvisorError("Advice service returned a non-object payload")

        try:
            return AdviceReport.model_validate(data)
        except ValidationError as e:
            raise AdvisorError(f"Advice payload failed validation: {e.error_count()} errors") from e

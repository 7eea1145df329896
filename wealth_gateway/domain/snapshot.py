"""Financial snapshot builder - core entry point assembling all derived metrics"""

from datetime import date
from decimal import Decimal
from wealth_gateway.domain.aggregation import aggregate_period
from wealth_gateway.domain.budgets import DEFAULT_ALERT_THRESHOLD, evaluate_budgets, summarize_budgets
from wealth_gateway.domain.frequency import annualize, monthly_total
from wealth_gateway.domain.goals import evaluate_goals
from wealth_gateway.domain.models import FinancialRecords, FinancialSnapshot
from wealth_gateway.domain.recurring import upcoming_obligations
from wealth_gateway.utils.date_utils import current_month_bounds
from wealth_gateway.utils.money import ZERO, safe_ratio


def build_snapshot(
    records: FinancialRecords,
    as_of: date,
    alert_threshold: Decimal = DEFAULT_ALERT_THRESHOLD,
    upcoming_days: int = 7,
    calendar_months: bool = False,
) -> FinancialSnapshot:
    """
    Main entry point: derive every metric for one user's records as of a date.

    The current period is the calendar month containing as_of. Ratios whose
    denominator is zero (no income, no cost basis) are reported as 0.
    """
    period_start, period_end = current_month_bounds(as_of)
    totals = aggregate_period(records.transactions, period_start, period_end)

    budget_status = evaluate_budgets(records.budgets, totals.category_spending, alert_threshold)

    monthly_bills = monthly_total(records.bills)
    monthly_subscriptions = monthly_total(records.subscriptions)
    monthly_recurring = monthly_bills + monthly_subscriptions
    active_obligations = [o for o in records.bills + records.subscriptions if o.status == "active"]
    annual_recurring = sum((annualize(o.amount, o.frequency) for o in active_obligations), ZERO)

    investment_value = sum((i.current_value for i in records.investments), ZERO)
    cost_basis = sum((i.cost_basis for i in records.investments), ZERO)

    net_savings = totals.income - totals.expenses

    return FinancialSnapshot(
        as_of=as_of,
        period_start=period_start,
        period_end=period_end,
        monthly_income=totals.income,
        monthly_expenses=totals.expenses,
        net_savings=net_savings,
        savings_rate=safe_ratio(net_savings, totals.income),
        category_spending=totals.category_spending,
        budget_status=budget_status,
        budget_summary=summarize_budgets(budget_status),
        monthly_bills=monthly_bills,
        monthly_subscriptions=monthly_subscriptions,
        monthly_recurring_total=monthly_recurring,
        annual_recurring_total=annual_recurring,
        debt_to_income_ratio=safe_ratio(monthly_recurring, totals.income),
        investment_value=investment_value,
        investment_cost_basis=cost_basis,
        investment_return=safe_ratio(investment_value - cost_basis, cost_basis),
        holdings_count=len(records.investments),
        goals_analysis=evaluate_goals(records.goals, as_of, calendar_months),
        upcoming_obligations=upcoming_obligations(active_obligations, as_of, upcoming_days),
        skipped_records=totals.skipped_count,
    )

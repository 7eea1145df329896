"""Budget adherence - category spending against budget ceilings"""

from decimal import Decimal
from typing import Dict, List, Mapping, Sequence
from wealth_gateway.domain.models import Budget, BudgetStatus, BudgetSummary
from wealth_gateway.utils.money import ZERO

UNBOUNDED = Decimal("Infinity")
DEFAULT_ALERT_THRESHOLD = Decimal(80)


def utilization_percentage(spent: Decimal, ceiling: Decimal) -> Decimal:
    """
    spent / ceiling * 100.

    A zero ceiling yields Infinity when anything was spent, 0 otherwise.
    """
    if ceiling == 0:
        return UNBOUNDED if spent > 0 else ZERO
    return spent / ceiling * 100


def classify(percentage: Decimal, alert_threshold: Decimal) -> str:
    """over above 100%, warning at or above the alert threshold, good otherwise"""
    if percentage > 100:
        return "over"
    if percentage >= alert_threshold:
        return "warning"
    return "good"


def evaluate_budgets(
    budgets: Sequence[Budget],
    category_spending: Mapping[str, Decimal],
    alert_threshold: Decimal = DEFAULT_ALERT_THRESHOLD,
) -> List[BudgetStatus]:
    """
    Compare category spending against budget ceilings.

    Budgets sharing a category are combined by summing their ceilings; the
    combined row keeps the position of the first one. A budget's own
    alert_threshold wins over the default.
    """
    ceilings: Dict[str, Decimal] = {}
    thresholds: Dict[str, Decimal] = {}
    for budget in budgets:
        ceilings[budget.category] = ceilings.get(budget.category, ZERO) + budget.amount
        if budget.alert_threshold is not None:
            thresholds[budget.category] = budget.alert_threshold

    statuses = []
    for category, ceiling in ceilings.items():
        spent = category_spending.get(category, ZERO)
        percentage = utilization_percentage(spent, ceiling)
        statuses.append(
            BudgetStatus(
                category=category,
                budget=ceiling,
                spent=spent,
                remaining=ceiling - spent,
                percentage=percentage,
                state=classify(percentage, thresholds.get(category, alert_threshold)),
            )
        )

    return statuses


def summarize_budgets(statuses: Sequence[BudgetStatus]) -> BudgetSummary:
    """Totals and alert lists across budget rows"""
    total_limit = sum((s.budget for s in statuses), ZERO)
    total_spent = sum((s.spent for s in statuses), ZERO)

    return BudgetSummary(
        total_limit=total_limit,
        total_spent=total_spent,
        total_remaining=total_limit - total_spent,
        overall_percentage=utilization_percentage(total_spent, total_limit),
        over_budget_categories=[s.category for s in statuses if s.state == "over"],
        warning_categories=[s.category for s in statuses if s.state == "warning"],
    )

"""Goal trajectory calculator - required contribution, on-track status and completion date"""

from datetime import date
from decimal import Decimal, ROUND_CEILING
from typing import Iterable, List, Optional
from wealth_gateway.domain.models import FinancialGoal, GoalAnalysis
from wealth_gateway.utils.date_utils import add_months, calendar_months_between
from wealth_gateway.utils.money import ZERO

DAYS_PER_MONTH = Decimal(30)
ON_TRACK_TOLERANCE = Decimal("0.9")


def progress_tier(progress_pct: Decimal) -> str:
    """Milestone band used for progress messaging"""
    if progress_pct >= 100:
        return "complete"
    elif progress_pct >= 75:
        return "almost_there"
    elif progress_pct >= 50:
        return "halfway"
    elif progress_pct >= 25:
        return "good_start"
    else:
        return "getting_started"


def months_until(as_of: date, target_date: Optional[date], calendar_months: bool = False) -> Decimal:
    """
    Months left until target_date, never negative.

    Default counts 30-day months; calendar_months=True steps real calendar months.
    """
    if target_date is None:
        return ZERO
    if calendar_months:
        return calendar_months_between(as_of, target_date)
    return max(ZERO, Decimal((target_date - as_of).days) / DAYS_PER_MONTH)


def evaluate_goal(goal: FinancialGoal, as_of: date, calendar_months: bool = False) -> GoalAnalysis:
    """
    Evaluate one goal as of a given date.

    Rules:
    - progress = current / target * 100 (0 for a non-positive target)
    - required monthly = remaining / months left (0 once the target date passes)
    - on track when the contribution is at least 90% of the required rate
    - completion date = as_of + ceil(remaining / contribution) calendar months;
      None when nothing is being contributed toward an unfunded goal
    """
    target = goal.target_amount
    current = goal.current_amount
    contribution = goal.monthly_contribution
    months_remaining = months_until(as_of, goal.target_date, calendar_months)

    # Degenerate target: nothing to save toward
    if target <= 0:
        return GoalAnalysis(
            title=goal.title,
            goal_type=goal.goal_type,
            current_amount=current,
            target_amount=target,
            monthly_contribution=contribution,
            progress_pct=ZERO,
            months_remaining=months_remaining,
            required_monthly=ZERO,
            on_track=True,
            overdue=False,
            progress_tier="complete",
            projected_completion_date=as_of,
            months_to_complete=0,
        )

    progress_pct = current / target * 100
    remaining = target - current
    funded = remaining <= 0

    if funded or months_remaining == 0:
        required_monthly = ZERO
    else:
        required_monthly = remaining / months_remaining

    on_track = funded or contribution >= required_monthly * ON_TRACK_TOLERANCE

    if funded:
        months_to_complete = 0
        completion_date = as_of
    elif contribution > 0:
        months_to_complete = int((remaining / contribution).to_integral_value(rounding=ROUND_CEILING))
        completion_date = add_months(as_of, months_to_complete)
    else:
        months_to_complete = None
        completion_date = None

    overdue = not funded and goal.target_date is not None and goal.target_date < as_of

    return GoalAnalysis(
        title=goal.title,
        goal_type=goal.goal_type,
        current_amount=current,
        target_amount=target,
        monthly_contribution=contribution,
        progress_pct=progress_pct,
        months_remaining=months_remaining,
        required_monthly=required_monthly,
        on_track=on_track,
        overdue=overdue,
        progress_tier=progress_tier(progress_pct),
        projected_completion_date=completion_date,
        months_to_complete=months_to_complete,
    )


def evaluate_goals(
    goals: Iterable[FinancialGoal],
    as_of: date,
    calendar_months: bool = False,
) -> List[GoalAnalysis]:
    """Evaluate active goals, preserving input order"""
    return [evaluate_goal(g, as_of, calendar_months) for g in goals if g.status == "active"]

"""Unit tests for goal trajectory"""

import pytest
from datetime import date, timedelta
from decimal import Decimal
from wealth_gateway.domain.goals import evaluate_goal, evaluate_goals, months_until, progress_tier
from wealth_gateway.domain.models import FinancialGoal

AS_OF = date(2026, 1, 1)


def _goal(target, current="0", contribution="0", target_date=None, status="active") -> FinancialGoal:
    return FinancialGoal(
        title="Goal",
        target_amount=Decimal(target),
        current_amount=Decimal(current),
        monthly_contribution=Decimal(contribution),
        target_date=target_date,
        status=status,
    )


def test_half_funded_goal_six_months_out():
    """Test 6000 left over ~6 months needs roughly 1000 a month"""
    goal = _goal("12000", "6000", "1000", target_date=date(2026, 7, 1))

    analysis = evaluate_goal(goal, AS_OF)

    assert analysis.progress_pct == Decimal("50")
    assert abs(analysis.required_monthly - Decimal("1000")) < Decimal("10")
    assert analysis.on_track is True
    assert analysis.progress_tier == "halfway"
    assert analysis.overdue is False


def test_calendar_months_mode():
    goal = _goal("12000", "6000", "1000", target_date=date(2026, 7, 15))

    analysis = evaluate_goal(goal, date(2026, 1, 15), calendar_months=True)

    assert analysis.months_remaining == 6
    assert analysis.required_monthly == Decimal("1000")


def test_fully_funded_goal():
    """Test a funded goal is complete and on track with no contribution"""
    goal = _goal("5000", "5000", target_date=date(2026, 3, 1))

    analysis = evaluate_goal(goal, AS_OF)

    assert analysis.progress_pct == Decimal("100")
    assert analysis.required_monthly == 0
    assert analysis.on_track is True
    assert analysis.projected_completion_date == AS_OF
    assert analysis.months_to_complete == 0


def test_overfunded_goal_keeps_progress_above_100():
    analysis = evaluate_goal(_goal("1000", "1500"), AS_OF)

    assert analysis.progress_pct == Decimal("150")
    assert analysis.required_monthly == 0
    assert analysis.progress_tier == "complete"


def test_non_positive_target_does_not_raise():
    analysis = evaluate_goal(_goal("0", "100"), AS_OF)

    assert analysis.progress_pct == 0
    assert analysis.required_monthly == 0
    assert analysis.on_track is True


def test_past_target_date():
    """Test passed target date means zero months left and nothing required"""
    goal = _goal("10000", "2000", "100", target_date=date(2025, 12, 1))

    analysis = evaluate_goal(goal, AS_OF)

    assert analysis.months_remaining == 0
    assert analysis.required_monthly == 0
    assert analysis.overdue is True


def test_no_target_date_requires_nothing():
    analysis = evaluate_goal(_goal("10000", "2000", "100"), AS_OF)

    assert analysis.months_remaining == 0
    assert analysis.required_monthly == 0
    assert analysis.on_track is True


def test_never_completes_without_contribution():
    """Test zero contribution toward an unfunded goal has no completion date"""
    analysis = evaluate_goal(_goal("10000", "2000", "0", target_date=date(2027, 1, 1)), AS_OF)

    assert analysis.projected_completion_date is None
    assert analysis.months_to_complete is None
    assert analysis.completion_reachable is False
    assert analysis.on_track is False


def test_completion_date_rounds_months_up():
    goal = _goal("4000", "1500", "1000")

    analysis = evaluate_goal(goal, date(2026, 1, 31))

    assert analysis.months_to_complete == 3
    assert analysis.projected_completion_date == date(2026, 4, 30)
    assert analysis.completion_reachable is True


@pytest.mark.parametrize(
    "contribution, expected",
    [("1000", True), ("900", True), ("899.99", False), ("0", False)],
)
def test_on_track_tolerance(contribution: str, expected: bool):
    """Test contributions within 90% of the required rate count as on track"""
    goal = _goal("10000", "0", contribution, target_date=AS_OF + timedelta(days=300))

    analysis = evaluate_goal(goal, AS_OF)

    assert analysis.required_monthly == Decimal("1000")
    assert analysis.on_track is expected


@pytest.mark.parametrize(
    "progress, tier",
    [("0", "getting_started"), ("25", "good_start"), ("50", "halfway"), ("75", "almost_there"), ("100", "complete")],
)
def test_progress_tiers(progress: str, tier: str):
    assert progress_tier(Decimal(progress)) == tier


def test_evaluate_goals_only_active():
    goals = [
        _goal("1000", "100"),
        _goal("1000", "100", status="completed"),
        _goal("2000", "100"),
    ]

    analyses = evaluate_goals(goals, AS_OF)

    assert [a.target_amount for a in analyses] == [Decimal("1000"), Decimal("2000")]


def test_months_until_optional_target_date():
    assert months_until(AS_OF, None) == 0
    assert months_until(AS_OF, AS_OF + timedelta(days=45)) == Decimal("1.5")
    assert months_until(AS_OF, date(2025, 12, 1)) == 0

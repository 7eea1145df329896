"""Net-worth projector - compounds savings and investments under a what-if scenario"""

from decimal import Decimal, DecimalException
from typing import Dict, Iterable, List, Optional, Sequence, Union
from wealth_gateway.domain.exceptions import InvalidScenarioError
from wealth_gateway.domain.models import (
    FinancialSnapshot,
    ForecastBaseline,
    Projection,
    ProjectionAssumptions,
    Scenario,
)
from wealth_gateway.utils.money import ZERO, round_money

DEFAULT_HORIZONS = (1, 5, 10)
DEFAULT_MILESTONES = (Decimal(100_000), Decimal(500_000), Decimal(1_000_000))

Baseline = Union[FinancialSnapshot, ForecastBaseline]


def _delta(value: Optional[Decimal]) -> Decimal:
    return ZERO if value is None else value


def monthly_surplus(snapshot: Baseline, scenario: Scenario) -> Decimal:
    """
    Income minus expenses after scenario deltas.

    Negative values are returned as-is, never clamped to zero.
    """
    income = snapshot.monthly_income + _delta(scenario.monthly_income)
    expenses = snapshot.monthly_expenses - _delta(scenario.expense_reduction)
    return income - expenses


def monthly_rate(scenario: Scenario, assumptions: ProjectionAssumptions) -> Decimal:
    """Monthly growth rate from the baseline annual return plus the scenario delta"""
    annual_pct = assumptions.annual_return_pct + _delta(scenario.investment_return_rate)
    return annual_pct / 100 / 12


def compound(principal: Decimal, contribution: Decimal, rate: Decimal, months: int) -> Decimal:
    """
    Value after compounding principal and end-of-month contributions for a number of months.

    Geometric month-over-month growth: P(1+r)^n + C((1+r)^n - 1)/r.
    """
    if rate == 0:
        return principal + contribution * months
    growth = (1 + rate) ** months
    return principal * growth + contribution * (growth - 1) / rate


def _project_horizon(
    snapshot: Baseline,
    scenario: Scenario,
    years: int,
    assumptions: ProjectionAssumptions,
) -> Projection:
    months = years * 12
    surplus = monthly_surplus(snapshot, scenario)
    invest_contribution = _delta(scenario.monthly_investment_contribution)
    rate = monthly_rate(scenario, assumptions)

    investment_value = compound(snapshot.investment_value, invest_contribution, rate, months)

    # Investment contributions come out of the surplus, not on top of it
    saved_per_month = surplus + _delta(scenario.monthly_savings_increase) - invest_contribution
    total_saved = saved_per_month * months

    windfall = _delta(scenario.one_time_windfall)

    expense_year = scenario.major_expense_year or 1
    if scenario.major_expense and years > 0 and expense_year <= years:
        major_expense = scenario.major_expense
    else:
        major_expense = ZERO

    net_worth = investment_value + total_saved + windfall - major_expense
    deflator = (1 + assumptions.inflation_pct / 100) ** years
    real_net_worth = net_worth / deflator

    return Projection(
        horizon_years=years,
        months=months,
        monthly_surplus=round_money(surplus),
        investment_value=round_money(investment_value),
        total_saved=round_money(total_saved),
        windfall_applied=round_money(windfall),
        major_expense_applied=round_money(major_expense),
        net_worth=round_money(net_worth),
        real_net_worth=round_money(real_net_worth),
    )


def _check_horizons(horizons_years: Iterable[int]) -> List[int]:
    horizons = list(horizons_years)
    for years in horizons:
        if isinstance(years, bool) or not isinstance(years, int):
            raise InvalidScenarioError(f"Horizon must be a whole number of years, got {years!r}")
        if years < 0:
            raise InvalidScenarioError(f"Horizon must not be negative, got {years}")
    return horizons


def _check_rates(scenario: Scenario, assumptions: ProjectionAssumptions) -> None:
    if monthly_rate(scenario, assumptions) <= -1:
        raise InvalidScenarioError("Annual return must be above -1200%")
    if assumptions.inflation_pct <= -100:
        raise InvalidScenarioError("Inflation must be above -100%")


def project(
    snapshot: Baseline,
    scenario: Optional[Scenario] = None,
    horizons_years: Iterable[int] = DEFAULT_HORIZONS,
    assumptions: Optional[ProjectionAssumptions] = None,
) -> Dict[int, Projection]:
    """
    Project net worth at each horizon (in years).

    Scenario fields are deltas on top of the baseline; an empty scenario gives
    the baseline projection. Values are rounded to cents only on the returned
    projections.

    Raises:
        InvalidScenarioError: A horizon is negative or not a whole number, a rate
            is out of range, or the figures overflow decimal arithmetic
    """
    scenario = scenario or Scenario()
    assumptions = assumptions or ProjectionAssumptions()
    if scenario.major_expense_year is not None and scenario.major_expense_year < 1:
        raise InvalidScenarioError("major_expense_year must be 1 or later")
    _check_rates(scenario, assumptions)
    horizons = _check_horizons(horizons_years)

    try:
        return {years: _project_horizon(snapshot, scenario, years, assumptions) for years in horizons}
    except DecimalException as e:
        raise InvalidScenarioError(f"Projection out of range: {e.__class__.__name__}") from e


def project_yearly(
    snapshot: Baseline,
    scenario: Optional[Scenario] = None,
    years: int = 10,
    assumptions: Optional[ProjectionAssumptions] = None,
) -> List[Projection]:
    """Year-by-year projections from year 0 through `years`, for charting"""
    if years < 0:
        raise InvalidScenarioError(f"Years must not be negative, got {years}")
    projections = project(snapshot, scenario, range(years + 1), assumptions)
    return [projections[y] for y in range(years + 1)]


def find_milestones(
    points: Sequence[Projection],
    thresholds: Iterable[Decimal] = DEFAULT_MILESTONES,
) -> Dict[Decimal, Optional[int]]:
    """First horizon year at which projected net worth reaches each threshold, or None"""
    milestones: Dict[Decimal, Optional[int]] = {}
    for threshold in thresholds:
        milestones[threshold] = next(
            (p.horizon_years for p in points if p.net_worth >= threshold),
            None,
        )
    return milestones

"""Forecast endpoints - what-if net-worth projections"""

import time
import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Request

from wealth_gateway.api.v1.schemas import (
    ForecastOptions,
    ForecastRequest,
    ForecastResponse,
    GoalAnalysisSchema,
    MilestoneSchema,
    ProjectionSchema,
    UserForecastRequest,
    UserForecastResponse,
    money_out,
)
from wealth_gateway.api.v1.snapshot import fetch_records, snapshot_for
from wealth_gateway.api.dependencies import get_entity_store_client, get_request_id, get_settings
from wealth_gateway.config import Settings
from wealth_gateway.domain.exceptions import InvalidScenarioError
from wealth_gateway.domain.models import ForecastBaseline, ProjectionAssumptions
from wealth_gateway.domain.projection import Baseline, find_milestones, monthly_surplus, project, project_yearly
from wealth_gateway.infrastructure.clients.entity_store import EntityStoreClient
from wealth_gateway.infrastructure.observability.logging import log_forecast
from wealth_gateway.infrastructure.observability.metrics import record_forecast

router = APIRouter()


def run_forecast(
    baseline: Baseline,
    options: ForecastOptions,
    config: Settings,
    request_id: str,
) -> ForecastResponse:
    """Project a baseline under the requested scenario, then record metrics and logs"""
    start_time = time.time()

    assumptions = ProjectionAssumptions(
        annual_return_pct=(
            options.annual_return_pct
            if options.annual_return_pct is not None
            else config.default_annual_return_pct
        ),
        inflation_pct=(
            options.inflation_pct
            if options.inflation_pct is not None
            else config.default_inflation_pct
        ),
    )
    scenario = options.scenario.to_domain()
    horizons = options.horizons_years if options.horizons_years is not None else config.forecast_horizons_years

    try:
        projections = project(baseline, scenario, horizons, assumptions)
        yearly = project_yearly(baseline, scenario, options.yearly_years, assumptions)
    except InvalidScenarioError as e:
        logging.warning(f"Invalid scenario: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    negative_surplus = monthly_surplus(baseline, scenario) < 0
    record_forecast(negative_surplus)
    log_forecast(request_id, list(projections), negative_surplus, (time.time() - start_time) * 1000)

    return ForecastResponse(
        projections=[ProjectionSchema.from_domain(p) for p in projections.values()],
        yearly=[ProjectionSchema.from_domain(p) for p in yearly],
        milestones=[
            MilestoneSchema(threshold=float(threshold), year=year)
            for threshold, year in find_milestones(yearly).items()
        ],
    )


@router.post("/forecast", response_model=ForecastResponse)
def create_forecast(
    request_body: ForecastRequest,
    request: Request,
    config: Settings = Depends(get_settings),
):
    """
    Project net worth under a scenario from caller-supplied figures.

    Returns projections at the requested horizons, a year-by-year series for
    charting, and the first year each net-worth milestone is reached.
    """
    baseline = ForecastBaseline(
        monthly_income=request_body.monthly_income,
        monthly_expenses=request_body.monthly_expenses,
        investment_value=request_body.investment_value,
    )
    return run_forecast(baseline, request_body, config, get_request_id(request))


@router.post("/users/{user_id}/forecast", response_model=UserForecastResponse)
async def create_user_forecast(
    user_id: str,
    request_body: UserForecastRequest,
    request: Request,
    config: Settings = Depends(get_settings),
    store: EntityStoreClient = Depends(get_entity_store_client),
):
    """
    Project net worth from a user's stored records.

    Flow:
    1. Fetch the user's records from the entity store
    2. Build the snapshot for the month containing as_of (default today)
    3. Project from the snapshot's income, expenses and investments
    4. Return projections with the goal analyses of the same snapshot
    """
    request_id = get_request_id(request)
    records = await fetch_records(store, user_id, request_id)

    snapshot = snapshot_for(records, request_body.as_of or date.today(), config, request_id, user_id, "entity_store")
    forecast = run_forecast(snapshot, request_body, config, request_id)

    return UserForecastResponse(
        **forecast.model_dump(),
        user_id=user_id,
        as_of=snapshot.as_of,
        monthly_income=money_out(snapshot.monthly_income),
        monthly_expenses=money_out(snapshot.monthly_expenses),
        investment_value=money_out(snapshot.investment_value),
        goals_analysis=[GoalAnalysisSchema.from_domain(g) for g in snapshot.goals_analysis],
    )

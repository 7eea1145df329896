"""POST /v1/goals/evaluate - goal trajectories"""

from datetime import date
from fastapi import APIRouter, Depends

from wealth_gateway.api.v1.schemas import GoalAnalysisSchema, GoalsRequest, GoalsResponse
from wealth_gateway.api.dependencies import get_settings
from wealth_gateway.config import Settings
from wealth_gateway.domain.goals import evaluate_goals

router = APIRouter()


@router.post("/goals/evaluate", response_model=GoalsResponse)
def evaluate(request_body: GoalsRequest, config: Settings = Depends(get_settings)):
    """
    Evaluate active goals as of a date (default today).

    Goals that cannot be completed at their current contribution come back
    with completion_reachable = false and no projected date.
    """
    as_of = request_body.as_of or date.today()
    calendar_months = (
        request_body.calendar_months
        if request_body.calendar_months is not None
        else config.goal_calendar_months
    )

    analyses = evaluate_goals([g.to_domain() for g in request_body.goals], as_of, calendar_months)
    return GoalsResponse(as_of=as_of, goals=[GoalAnalysisSchema.from_domain(a) for a in analyses])

"""POST /v1/recurring/detect - infer bills and subscriptions from transaction history"""

from fastapi import APIRouter

from wealth_gateway.api.v1.schemas import DetectedObligationSchema, RecurringDetectRequest, RecurringDetectResponse
from wealth_gateway.domain.recurring import detect_recurring

router = APIRouter()


@router.post("/recurring/detect", response_model=RecurringDetectResponse)
def detect(request_body: RecurringDetectRequest):
    """Detect merchants charging on a steady cadence"""
    detected = detect_recurring(t.to_domain() for t in request_body.transactions)
    return RecurringDetectResponse(recurring=[DetectedObligationSchema.from_domain(d) for d in detected])

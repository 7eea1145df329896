"""POST /v1/advice - snapshot-backed financial advice"""

import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Request

from wealth_gateway.api.v1.schemas import AdviceRequest, AdviceResponse, SnapshotResponse
from wealth_gateway.api.v1.snapshot import fetch_records, snapshot_for
from wealth_gateway.api.dependencies import get_advisor_client, get_entity_store_client, get_request_id, get_settings
from wealth_gateway.config import Settings
from wealth_gateway.domain.exceptions import AdvisorError
from wealth_gateway.infrastructure.clients.advisor import AdvisorClient
from wealth_gateway.infrastructure.clients.entity_store import EntityStoreClient

router = APIRouter()


@router.post("/advice", response_model=AdviceResponse)
async def create_advice(
    request_body: AdviceRequest,
    request: Request,
    config: Settings = Depends(get_settings),
    store: EntityStoreClient = Depends(get_entity_store_client),
    advisor: AdvisorClient = Depends(get_advisor_client),
):
    """
    Generate advice for a user.

    Flow:
    1. Fetch the user's records from the entity store
    2. Build the current-month snapshot
    3. Send the snapshot context to the advice service
    4. Validate the returned advice and return it with the snapshot
    """
    request_id = get_request_id(request)
    records = await fetch_records(store, request_body.user_id, request_id)

    snapshot = snapshot_for(
        records,
        request_body.as_of or date.today(),
        config,
        request_id,
        request_body.user_id,
        "entity_store",
    )

    try:
        report = await advisor.request_advice(snapshot, request_body.advice_type)
    except AdvisorError as e:
        logging.error(f"Advisor error: {e}", extra={"request_id": request_id, "user_id": request_body.user_id})
        raise HTTPException(status_code=502, detail="Advice service unavailable")

    return AdviceResponse(
        user_id=request_body.user_id,
        snapshot=SnapshotResponse.from_domain(snapshot),
        advice=report,
    )

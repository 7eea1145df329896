"""Snapshot endpoints - current-month financial metrics"""

import time
import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Request

from wealth_gateway.api.v1.schemas import SnapshotRequest, SnapshotResponse
from wealth_gateway.api.dependencies import get_entity_store_client, get_request_id, get_settings
from wealth_gateway.config import Settings
from wealth_gateway.domain.exceptions import EntityStoreError
from wealth_gateway.domain.models import FinancialRecords, FinancialSnapshot
from wealth_gateway.domain.snapshot import build_snapshot
from wealth_gateway.infrastructure.clients.entity_store import EntityStoreClient
from wealth_gateway.infrastructure.observability.logging import log_snapshot
from wealth_gateway.infrastructure.observability.metrics import entity_store_failures_counter, record_snapshot

router = APIRouter()


def snapshot_for(
    records: FinancialRecords,
    as_of: date,
    config: Settings,
    request_id: str,
    user_id: str | None,
    source: str,
) -> FinancialSnapshot:
    """Build a snapshot with configured thresholds, then record metrics and logs"""
    start_time = time.time()

    snapshot = build_snapshot(
        records,
        as_of,
        alert_threshold=config.budget_alert_threshold_pct,
        upcoming_days=config.upcoming_window_days,
        calendar_months=config.goal_calendar_months,
    )

    duration_ms = (time.time() - start_time) * 1000
    record_snapshot(source, float(snapshot.savings_rate), snapshot.skipped_records)
    log_snapshot(request_id, user_id, snapshot.period_start.isoformat(), snapshot.skipped_records, duration_ms)
    return snapshot


async def fetch_records(store: EntityStoreClient, user_id: str, request_id: str) -> FinancialRecords:
    """Fetch a user's records, mapping store failures to 503"""
    try:
        return await store.fetch_records(user_id)
    except EntityStoreError as e:
        entity_store_failures_counter.inc()
        logging.error(f"Entity store error: {e}", extra={"request_id": request_id, "user_id": user_id})
        raise HTTPException(status_code=503, detail="Entity store unavailable")


@router.post("/snapshot", response_model=SnapshotResponse)
def create_snapshot(
    request_body: SnapshotRequest,
    request: Request,
    config: Settings = Depends(get_settings),
):
    """
    Build a financial snapshot from records supplied in the request.

    Malformed transactions are skipped and counted in skipped_records.
    """
    request_id = get_request_id(request)
    as_of = request_body.as_of or date.today()

    snapshot = snapshot_for(request_body.to_records(), as_of, config, request_id, None, "inline")
    return SnapshotResponse.from_domain(snapshot)


@router.get("/users/{user_id}/snapshot", response_model=SnapshotResponse)
async def get_user_snapshot(
    user_id: str,
    request: Request,
    as_of: date | None = None,
    config: Settings = Depends(get_settings),
    store: EntityStoreClient = Depends(get_entity_store_client),
):
    """
    Fetch a user's records from the entity store and build their snapshot.

    Flow:
    1. List transactions, budgets, goals, investments, bills, subscriptions
    2. Aggregate the calendar month containing as_of (default today)
    3. Return derived metrics
    """
    request_id = get_request_id(request)
    records = await fetch_records(store, user_id, request_id)

    snapshot = snapshot_for(records, as_of or date.today(), config, request_id, user_id, "entity_store")
    return SnapshotResponse.from_domain(snapshot)

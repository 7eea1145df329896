"""Entity store HTTP client for fetching a user's financial records"""

import asyncio
from datetime import date
from typing import Any, Dict, List, Optional
import httpx
from wealth_gateway.domain.models import (
    Budget,
    FinancialGoal,
    FinancialRecords,
    Investment,
    RecurringObligation,
    Transaction,
)
from wealth_gateway.domain.exceptions import EntityStoreError
from wealth_gateway.config import settings
from wealth_gateway.utils.money import ZERO, to_decimal

ENTITIES = ("Transaction", "Budget", "FinancialGoal", "Investment", "BillPayment", "Subscription")


def parse_date(value: Any) -> Optional[date]:
    """ISO date (or datetime) string to date; None when missing or unparseable"""
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or len(value) < 10:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def parse_str(value: Any) -> Optional[str]:
    """Text field as str; numbers are stringified, anything else is None"""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def parse_transaction(raw: Dict[str, Any]) -> Transaction:
    return Transaction(
        date=parse_date(raw.get("date")),
        amount=to_decimal(raw.get("amount")),
        category=parse_str(raw.get("category")),
        merchant=parse_str(raw.get("merchant")),
        description=parse_str(raw.get("description")),
    )


def parse_budget(raw: Dict[str, Any]) -> Budget:
    # Older budget records carry monthly_limit instead of amount
    amount = to_decimal(raw.get("amount", raw.get("monthly_limit")))
    return Budget(
        category=parse_str(raw.get("category")) or "other",
        amount=amount if amount is not None else ZERO,
        alert_threshold=to_decimal(raw.get("alert_threshold")),
    )


def parse_goal(raw: Dict[str, Any]) -> FinancialGoal:
    return FinancialGoal(
        title=parse_str(raw.get("title")) or parse_str(raw.get("goal_name")) or "Untitled goal",
        target_amount=to_decimal(raw.get("target_amount")) or ZERO,
        current_amount=to_decimal(raw.get("current_amount")) or ZERO,
        target_date=parse_date(raw.get("target_date")),
        monthly_contribution=to_decimal(raw.get("monthly_contribution")) or ZERO,
        status=parse_str(raw.get("status")) or "active",
        goal_type=parse_str(raw.get("goal_type")),
    )


def parse_investment(raw: Dict[str, Any]) -> Investment:
    return Investment(
        current_value=to_decimal(raw.get("current_value")) or ZERO,
        cost_basis=to_decimal(raw.get("cost_basis")) or ZERO,
        asset_type=parse_str(raw.get("asset_type")),
        name=parse_str(raw.get("name")),
    )


def parse_bill(raw: Dict[str, Any]) -> RecurringObligation:
    return RecurringObligation(
        amount=to_decimal(raw.get("amount")),
        frequency=parse_str(raw.get("frequency")),
        status=parse_str(raw.get("status")) or "active",
        name=parse_str(raw.get("name")) or parse_str(raw.get("payee")),
        next_due_date=parse_date(raw.get("next_payment_date")),
        kind="bill",
    )


def parse_subscription(raw: Dict[str, Any]) -> RecurringObligation:
    return RecurringObligation(
        amount=to_decimal(raw.get("billing_amount")),
        frequency=parse_str(raw.get("billing_frequency")),
        status=parse_str(raw.get("status")) or "active",
        name=parse_str(raw.get("name")),
        next_due_date=parse_date(raw.get("next_billing_date")),
        kind="subscription",
    )


class EntityStoreClient:
    """Client for the hosted entity store holding a user's records"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.entity_store_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def _list(self, client: httpx.AsyncClient, entity: str, user_id: str) -> List[Dict[str, Any]]:
        response = await client.get(
            f"{self.base_url}/entities/{entity}",
            params={"user_id": user_id},
        )
        response.raise_for_status()
        data = response.json()

        # Accept both a bare list and {"items": [...]}
        items = data.get("items") if isinstance(data, dict) else data
        if not isinstance(items, list):
            raise EntityStoreError(f"Entity store returned a non-list payload for {entity}")
        return [item for item in items if isinstance(item, dict)]

    async def fetch_records(self, user_id: str) -> FinancialRecords:
        """
        Fetch every record type for a user, concurrently.

        Raises:
            EntityStoreError: On timeout, HTTP errors, or invalid response
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                transactions, budgets, goals, investments, bills, subscriptions = await asyncio.gather(
                    *(self._list(client, entity, user_id) for entity in ENTITIES)
                )

            except httpx.TimeoutException as e:
                raise EntityStoreError(f"Entity store timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise EntityStoreError(f"Entity store error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise EntityStoreError(f"Entity store unreachable: {e}") from e
            except ValueError as e:
                raise EntityStoreError(f"Invalid JSON from entity store: {e}") from e

        return FinancialRecords(
            transactions=[parse_transaction(t) for t in transactions],
            budgets=[parse_budget(b) for b in budgets],
            goals=[parse_goal(g) for g in goals],
            investments=[parse_investment(i) for i in investments],
            bills=[parse_bill(b) for b in bills],
            subscriptions=[parse_subscription(s) for s in subscriptions],
        )

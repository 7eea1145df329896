"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from wealth_gateway.config import Settings, settings
from wealth_gateway.infrastructure.clients.advisor import AdvisorClient
from wealth_gateway.infrastructure.clients.entity_store import EntityStoreClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_settings() -> Settings:
    """Provide application settings"""
    return settings


def get_entity_store_client() -> EntityStoreClient:
    """Provide entity store client instance"""
    return EntityStoreClient()


def get_advisor_client() -> AdvisorClient:
    """Provide advice service client instance"""
    return AdvisorClient()

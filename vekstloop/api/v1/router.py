"""Root API router for v1 endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from vekstloop.api.v1 import applications, businesses, contacts, customers, email_provider, health, leads, tickets
from vekstloop.core.config import get_config

api_router = APIRouter(prefix=get_config().API_PREFIX)
api_router.include_router(health.router)
api_router.include_router(applications.router)
api_router.include_router(customers.router)
api_router.include_router(leads.router)
api_router.include_router(businesses.router)
api_router.include_router(contacts.router)
api_router.include_router(tickets.router)
api_router.include_router(email_provider.router)


def get_api_router() -> APIRouter:
    return api_router

"""Support ticket actions."""

from __future__ import annotations

from typing import Any

from vekstloop.actions.base import ActionContext, action
from vekstloop.services.business_service import BusinessService
from vekstloop.services.ticket_service import TicketService


def _service(ctx: ActionContext) -> TicketService:
    return TicketService(ctx.db, workspace_id=ctx.workspace_id)


@action("Failed to fetch tickets")
def get_tickets(
    ctx: ActionContext,
    status: str | None = None,
    business_id: str | None = None,
    assignee_id: str | None = None,
):
    return _service(ctx).get_all(status=status, business_id=business_id, assignee_id=assignee_id)


@action("Failed to fetch ticket")
def get_ticket(ctx: ActionContext, ticket_id: str):
    return _service(ctx).get_by_id(ticket_id)


@action("Failed to create ticket", revalidate=("/tickets",))
def create_ticket(ctx: ActionContext, data: dict[str, Any]):
    return _service(ctx).create(data)


@action("Failed to update ticket", revalidate=("/tickets/{ticket_id}", "/tickets"))
def update_ticket(ctx: ActionContext, ticket_id: str, data: dict[str, Any]):
    return _service(ctx).update(ticket_id, data)


@action("Failed to add comment", revalidate=("/tickets/{ticket_id}",))
def add_ticket_comment(ctx: ActionContext, ticket_id: str, data: dict[str, Any]):
    return _service(ctx).add_comment(ticket_id, data, author_id=ctx.user_id)


@action("Failed to delete ticket", revalidate=("/tickets",))
def delete_ticket(ctx: ActionContext, ticket_id: str):
    _service(ctx).delete(ticket_id)
    return {"success": True}


@action("Failed to search businesses")
def search_ticket_businesses(ctx: ActionContext, query: str):
    return BusinessService(ctx.db, workspace_id=ctx.workspace_id).search(query)

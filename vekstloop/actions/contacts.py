"""Contact actions."""

from __future__ import annotations

from typing import Any

from vekstloop.actions.base import ActionContext, action
from vekstloop.services.contact_service import ContactService


@action("Failed to fetch contacts")
def get_contacts(ctx: ActionContext):
    return ContactService(ctx.db, workspace_id=ctx.workspace_id).get_all()


@action("Failed to fetch contact details")
def get_contact_by_id(ctx: ActionContext, contact_id: str):
    return ContactService(ctx.db, workspace_id=ctx.workspace_id).get_by_id(contact_id)


@action("Failed to fetch business contacts")
def get_contacts_by_business(ctx: ActionContext, business_id: str):
    return ContactService(ctx.db, workspace_id=ctx.workspace_id).get_by_business(business_id)


@action("Failed to create contact", revalidate=("/businesses/{business_id}", "/contacts"))
def create_contact(ctx: ActionContext, business_id: str, data: dict[str, Any]):
    return ContactService(ctx.db, workspace_id=ctx.workspace_id).create(business_id, data)


@action("Failed to set primary contact", revalidate=("/contacts",))
def set_primary_contact(ctx: ActionContext, contact_id: str):
    return ContactService(ctx.db, workspace_id=ctx.workspace_id).set_primary(contact_id)

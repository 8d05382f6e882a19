"""Business directory actions."""

from __future__ import annotations

from typing import Any

from vekstloop.actions.base import ActionContext, action
from vekstloop.services.business_service import BusinessService
from vekstloop.services.contact_service import ContactService


def _service(ctx: ActionContext) -> BusinessService:
    return BusinessService(ctx.db, workspace_id=ctx.workspace_id)


@action("Failed to fetch businesses")
def get_businesses(ctx: ActionContext):
    return _service(ctx).get_all()


@action("Failed to fetch business details")
def get_business_by_id(ctx: ActionContext, business_id: str):
    return _service(ctx).get_by_id(business_id)


@action("Failed to fetch business contacts")
def get_business_contacts(ctx: ActionContext, business_id: str):
    return _service(ctx).get_contacts(business_id)


@action("Failed to fetch business activities")
def get_business_activities(ctx: ActionContext, business_id: str):
    return _service(ctx).get_activities(business_id)


@action("Failed to fetch business offers")
def get_business_offers(ctx: ActionContext, business_id: str):
    return _service(ctx).get_offers(business_id)


@action("Failed to search businesses")
def search_businesses(ctx: ActionContext, query: str):
    return _service(ctx).search(query)


@action("Failed to fetch primary contact")
def get_primary_contact(ctx: ActionContext, business_id: str):
    return ContactService(ctx.db, workspace_id=ctx.workspace_id).get_primary(business_id)


@action("Failed to update business", revalidate=("/businesses/{business_id}", "/businesses"))
def update_business(ctx: ActionContext, business_id: str, data: dict[str, Any]):
    return _service(ctx).update(business_id, data)


@action("Failed to delete business", revalidate=("/businesses",))
def delete_business(ctx: ActionContext, business_id: str, cascade_contacts: bool = True):
    return _service(ctx).delete(business_id, cascade_contacts=cascade_contacts)


@action("Failed to add tags", revalidate=("/businesses/{business_id}",))
def add_business_tags(ctx: ActionContext, business_id: str, names: list[str]):
    return _service(ctx).add_tags(business_id, names)


@action("Failed to remove tag", revalidate=("/businesses/{business_id}",))
def remove_business_tag(ctx: ActionContext, business_id: str, name: str):
    return _service(ctx).remove_tag(business_id, name)

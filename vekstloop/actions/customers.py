"""Customer actions (businesses in the customer stage)."""

from __future__ import annotations

from typing import Any

from vekstloop.actions.base import ActionContext, action
from vekstloop.services.business_service import BusinessService


def _service(ctx: ActionContext) -> BusinessService:
    return BusinessService(ctx.db, workspace_id=ctx.workspace_id)


@action("Failed to fetch customers")
def get_customers(ctx: ActionContext):
    return _service(ctx).get_customers()


@action("Failed to fetch customer details")
def get_customer_by_id(ctx: ActionContext, customer_id: str):
    return _service(ctx).get_by_id(customer_id)


@action("Failed to update customer", revalidate=("/customers/{customer_id}", "/customers"))
def update_customer_details(ctx: ActionContext, customer_id: str, data: dict[str, Any]):
    return _service(ctx).update(customer_id, data)


@action("Failed to delete customer", revalidate=("/customers",))
def delete_customer(ctx: ActionContext, customer_id: str):
    return _service(ctx).delete(customer_id)


@action(
    "Failed to convert lead to customer",
    revalidate=("/leads", "/leads/{lead_id}", "/customers"),
)
def convert_lead_to_customer(ctx: ActionContext, lead_id: str, data: dict[str, Any] | None = None):
    return _service(ctx).convert_to_customer(lead_id, data)


@action("Failed to send SMS", revalidate=("/customers/{customer_id}",))
def send_sms_to_customer(ctx: ActionContext, customer_id: str, content: str):
    return _service(ctx).send_sms(customer_id, content, ctx.user_id)


@action("Failed to fetch SMS history")
def get_sms_history(ctx: ActionContext, customer_id: str):
    return _service(ctx).get_sms_history(customer_id)

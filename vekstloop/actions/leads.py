"""Lead actions (businesses in the lead, prospect or qualified stages)."""

from __future__ import annotations

from typing import Any

from vekstloop.actions.base import ActionContext, action
from vekstloop.services.business_service import BusinessService


@action("Failed to fetch leads")
def get_leads(ctx: ActionContext):
    return BusinessService(ctx.db, workspace_id=ctx.workspace_id).get_leads()


@action("Failed to fetch lead details")
def get_lead_by_id(ctx: ActionContext, lead_id: str):
    return BusinessService(ctx.db, workspace_id=ctx.workspace_id).get_by_id(lead_id)


@action("Failed to create lead", revalidate=("/leads",))
def create_lead(ctx: ActionContext, data: dict[str, Any]):
    return BusinessService(ctx.db, workspace_id=ctx.workspace_id).create(data)


@action("Failed to update lead status", revalidate=("/leads", "/leads/{lead_id}"))
def update_lead_status(ctx: ActionContext, lead_id: str, stage: str):
    return BusinessService(ctx.db, workspace_id=ctx.workspace_id).update_stage(lead_id, stage)

"""
api/routes/dashboard.py
-----------------------
GET /api/dashboard/stats — Row counts for the dashboard cards.

Counts go through the same repositories as the lists, so a staff member
sees the number of customers assigned to them while a manager sees the
whole tenant. Entities the caller's role may not list are left out.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.db.session import get_db
from bizdesk.dependencies import CurrentUser, get_scope
from bizdesk.repositories.entities import REPOSITORIES
from bizdesk.tenancy.policy import Action, access_filter
from bizdesk.tenancy.scope import ScopeContext, ScopeMode, capability_for

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])

DASHBOARD_ENTITIES = (
    "users",
    "customers",
    "leads",
    "tasks",
    "businesses",
    "agency_sales",
    "investments",
    "seo_articles",
)


@router.get("/stats", summary="Scoped, role-filtered row counts")
async def dashboard_stats(
    db: Annotated[AsyncSession, Depends(get_db)],
    scope: Annotated[ScopeContext, Depends(get_scope)],
    caller: CurrentUser,
) -> dict:
    capability = capability_for(scope, ScopeMode.TENANT_OR_GLOBAL)
    counts: dict[str, int] = {}
    for entity in DASHBOARD_ENTITIES:
        if not access_filter.allows(entity, Action.LIST, caller):
            continue
        counts[entity] = await REPOSITORIES[entity](db, capability).count(caller)
    return {"scope": scope.source.value, "company_id": scope.company_id, "counts": counts}

"""
api/routes/tenants.py
---------------------
Tenant branding and root-domain tenant management.

GET    /api/tenant                    — Branding for the current host.
GET    /api/admin/companies           — List every tenant.
POST   /api/admin/companies           — Onboard a tenant (slug → subdomain).
PATCH  /api/admin/companies/{id}      — Rename / rebrand a tenant.
DELETE /api/admin/companies/{id}      — Delete a tenant and, through the
                                        ON DELETE CASCADE keys, all its rows.

Management is only served on the root domain, to platform operators
(users without a home tenant) holding the admin or CEO role.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.core.config import settings
from bizdesk.core.errors import Forbidden, RecordNotFound
from bizdesk.db.session import get_db
from bizdesk.dependencies import get_current_user, get_scope
from bizdesk.models.tenant import Company
from bizdesk.models.user import User, UserRole
from bizdesk.schemas.tenant import CompanyCreate, CompanyRead, CompanyUpdate, TenantBranding
from bizdesk.services.tenant_service import TenantService
from bizdesk.tenancy.scope import ScopeContext, ScopeSource

router = APIRouter(tags=["Tenants"])

_OPERATOR_ROLES = {UserRole.admin.value, UserRole.ceo.value}


@router.get("/api/tenant", response_model=TenantBranding, summary="Branding for this host")
async def current_tenant(
    scope: Annotated[ScopeContext, Depends(get_scope)],
) -> TenantBranding:
    tenant = scope.tenant
    if tenant is None:
        return TenantBranding(id=None, slug=None, name=settings.APP_NAME, scope=scope.source.value)
    return TenantBranding(
        id=tenant.id,
        slug=tenant.slug,
        name=tenant.name,
        logo_url=tenant.logo_url,
        primary_color=tenant.primary_color,
        secondary_color=tenant.secondary_color,
        scope=scope.source.value,
    )


async def get_platform_operator(
    user: Annotated[User, Depends(get_current_user)],
    scope: Annotated[ScopeContext, Depends(get_scope)],
) -> User:
    """
    Root domain + no home tenant + admin/CEO role.
    Raises 403 otherwise.
    """
    if scope.source is not ScopeSource.ROOT:
        raise Forbidden("Tenant management is only available on the root domain")
    if not user.is_platform_operator or user.role not in _OPERATOR_ROLES:
        raise Forbidden("Platform operator privileges required")
    return user


PlatformOperator = Annotated[User, Depends(get_platform_operator)]


async def _load_company(db: AsyncSession, company_id: str) -> Company:
    company = await TenantService.get_tenant_by_id(db, company_id)
    if company is None:
        raise RecordNotFound("company")
    return company


@router.get("/api/admin/companies", response_model=list[CompanyRead], summary="List tenants")
async def list_companies(
    db: Annotated[AsyncSession, Depends(get_db)],
    operator: PlatformOperator,
) -> list[CompanyRead]:
    companies = await TenantService.list_tenants(db)
    return [CompanyRead.model_validate(c) for c in companies]


@router.post(
    "/api/admin/companies",
    response_model=CompanyRead,
    status_code=status.HTTP_201_CREATED,
    summary="Onboard a new tenant (company)",
)
async def create_company(
    body: CompanyCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    operator: PlatformOperator,
) -> CompanyRead:
    try:
        company = await TenantService.create_tenant(db, body.model_dump())
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    return CompanyRead.model_validate(company)


@router.patch(
    "/api/admin/companies/{company_id}",
    response_model=CompanyRead,
    summary="Update a tenant",
)
async def update_company(
    company_id: str,
    body: CompanyUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    operator: PlatformOperator,
) -> CompanyRead:
    company = await _load_company(db, company_id)
    try:
        company = await TenantService.update_tenant(db, company, body.model_dump(exclude_unset=True))
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    return CompanyRead.model_validate(company)


@router.delete(
    "/api/admin/companies/{company_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a tenant and all of its rows",
)
async def delete_company(
    company_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    operator: PlatformOperator,
) -> Response:
    company = await _load_company(db, company_id)
    await TenantService.delete_tenant(db, company)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

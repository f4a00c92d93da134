"""
services/tenant_service.py
--------------------------
Business logic for tenant (company) management.

These operations run only from the root domain, by platform operators.
Service layer is responsible for:
  - Constructing queries
  - Enforcing business rules (unique, non-reserved slugs)
  - Returning domain objects (ORM models) to the route layer
  - Never returning HTTP responses (that's the route's job)

Deleting a company relies on the ON DELETE CASCADE foreign keys declared
on every scoped table; there is no list of tables to clean up here.
"""

from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.core.config import settings
from bizdesk.core.logging import get_logger
from bizdesk.db.base import drop_required_nulls
from bizdesk.models.tenant import Company

logger = get_logger(__name__)


class TenantService:

    @staticmethod
    async def _check_slug(db: AsyncSession, slug: str, exclude_id: str | None = None) -> None:
        if slug in {label.lower() for label in settings.RESERVED_SUBDOMAINS}:
            raise ValueError(f"Slug '{slug}' is reserved")
        existing = await TenantService.get_tenant_by_slug(db, slug)
        if existing is not None and existing.id != exclude_id:
            raise ValueError(f"Tenant '{slug}' already exists")

    @staticmethod
    async def create_tenant(db: AsyncSession, data: Mapping[str, Any]) -> Company:
        """
        Create a new tenant.
        Raises ValueError if the slug is reserved or already taken.
        """
        await TenantService._check_slug(db, data["slug"])
        tenant = Company(**data)
        db.add(tenant)
        await db.flush()
        await db.refresh(tenant)
        logger.info("Tenant created", company_id=tenant.id, slug=tenant.slug)
        return tenant

    @staticmethod
    async def update_tenant(db: AsyncSession, tenant: Company, data: Mapping[str, Any]) -> Company:
        data = drop_required_nulls(Company, dict(data))
        if "slug" in data and data["slug"] != tenant.slug:
            await TenantService._check_slug(db, data["slug"], exclude_id=tenant.id)
            logger.warning("Tenant slug changed", company_id=tenant.id, old=tenant.slug, new=data["slug"])
        for key, value in data.items():
            setattr(tenant, key, value)
        await db.flush()
        await db.refresh(tenant)
        return tenant

    @staticmethod
    async def delete_tenant(db: AsyncSession, tenant: Company) -> None:
        await db.delete(tenant)
        await db.flush()
        logger.info("Tenant deleted", company_id=tenant.id, slug=tenant.slug)

    @staticmethod
    async def list_tenants(db: AsyncSession) -> list[Company]:
        result = await db.execute(select(Company).order_by(Company.created_at.desc(), Company.slug))
        return list(result.scalars().all())

    @staticmethod
    async def get_tenant_by_id(db: AsyncSession, tenant_id: str) -> Company | None:
        result = await db.execute(select(Company).where(Company.id == tenant_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_tenant_by_slug(db: AsyncSession, slug: str) -> Company | None:
        result = await db.execute(select(Company).where(Company.slug == slug))
        return result.scalar_one_or_none()

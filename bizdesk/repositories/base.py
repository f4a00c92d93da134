"""
repositories/base.py
--------------------
ScopedRepository: the one data-access surface every handler goes through.

A repository is bound to a capability when it is constructed:
  TenantScoped(X)  reads filter company_id = X, creates stamp company_id = X
  Unrestricted()   reads span every tenant, creates leave company_id NULL

Every read, update and delete is built from _visible(), which applies the
tenant predicate and the AccessFilter ownership predicate together. There
is no code path that applies one without the other.

Critical security invariants:
  - company_id in a request payload is never honoured; the capability is.
  - company_id of an existing row is never rewritten.
  - A row outside the caller's tenant or ownership raises RecordNotFound,
    the same failure as a row that does not exist.
"""

import asyncio
from typing import Any, ClassVar, Generic, Mapping, Optional, Sequence, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from bizdesk.core.config import settings
from bizdesk.core.errors import Forbidden, QueryTimeout, RecordNotFound
from bizdesk.core.logging import get_logger
from bizdesk.db.base import Base, drop_required_nulls
from bizdesk.models.user import User
from bizdesk.tenancy.policy import AccessFilter, Action, access_filter
from bizdesk.tenancy.scope import Capability, TenantScoped

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

PROTECTED_FIELDS = frozenset({"id", "company_id", "created_at", "updated_at"})


class ScopedRepository(Generic[ModelT]):
    model: ClassVar[type]
    entity: ClassVar[str]
    label: ClassVar[str]
    # Column stamped with the caller's id on every create (created_by, ...)
    creator_column: ClassVar[Optional[str]] = None

    def __init__(
        self,
        db: AsyncSession,
        capability: Capability,
        access: AccessFilter = access_filter,
        timeout: Optional[float] = None,
    ) -> None:
        self.db = db
        self.capability = capability
        self.access = access
        self.timeout = settings.QUERY_TIMEOUT_SECONDS if timeout is None else timeout

    # ── Scope helpers ─────────────────────────────────────────────────────────

    @property
    def company_id(self) -> Optional[str]:
        return self.capability.company_id

    @property
    def is_tenant_scoped(self) -> bool:
        return isinstance(self.capability, TenantScoped)

    def order_by(self) -> Sequence[Any]:
        return (self.model.created_at.desc(), self.model.id)

    def _visible(self, action: Action, caller: User, stmt: Optional[Select] = None) -> Select:
        stmt = select(self.model) if stmt is None else stmt
        if self.is_tenant_scoped:
            stmt = stmt.where(self.model.company_id == self.company_id)
        ownership = self.access.predicate(self.entity, action, caller, self.model)
        if ownership is not None:
            stmt = stmt.where(ownership)
        return stmt

    async def _bounded(self, awaitable):
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error("Scoped query timed out", entity=self.entity, timeout=self.timeout)
            raise QueryTimeout()

    def _column_values(self, data: Mapping[str, Any]) -> dict[str, Any]:
        columns = self.model.__mapper__.column_attrs.keys()
        return drop_required_nulls(self.model, {
            key: value
            for key, value in data.items()
            if key in columns and key not in PROTECTED_FIELDS
        })

    async def _check_references(self, values: Mapping[str, Any]) -> None:
        """
        Every foreign key supplied by the caller must name a row inside the
        bound tenant. Dangling and foreign ids both raise RecordNotFound.
        """
        for key, value in values.items():
            if value is None:
                continue
            for fk in self.model.__mapper__.columns[key].foreign_keys:
                target = fk.column.table
                if target.name == "companies":
                    continue
                stmt = select(target.c.id).where(target.c.id == value)
                if self.is_tenant_scoped and "company_id" in target.c:
                    stmt = stmt.where(target.c.company_id == self.company_id)
                result = await self._bounded(self.db.execute(stmt))
                if result.scalar_one_or_none() is None:
                    logger.warning(
                        "Reference outside scope refused",
                        entity=self.entity,
                        column=key,
                        company_id=self.company_id,
                    )
                    raise RecordNotFound("user" if target.name == "users" else key.removesuffix("_id"))

    def _owned_by(self, values: Mapping[str, Any], caller: User, columns: tuple[str, ...]) -> bool:
        return any(values.get(column) == caller.id for column in columns)

    async def _fetch(self, row_id: str, action: Action, caller: User) -> ModelT:
        stmt = self._visible(action, caller).where(self.model.id == row_id)
        result = await self._bounded(self.db.execute(stmt))
        row = result.scalar_one_or_none()
        if row is None:
            raise RecordNotFound(self.label)
        return row

    # ── Hooks ─────────────────────────────────────────────────────────────────

    def prepare_create(self, data: dict[str, Any], caller: User) -> dict[str, Any]:
        return data

    def prepare_update(self, row: ModelT, data: dict[str, Any], caller: User) -> dict[str, Any]:
        return data

    def check_update(self, row_id: str, data: Mapping[str, Any], caller: User) -> None:
        pass

    def check_delete(self, row_id: str, caller: User) -> None:
        pass

    # ── Surface ───────────────────────────────────────────────────────────────

    async def list(self, caller: User) -> list[ModelT]:
        self.access.check(self.entity, Action.LIST, caller)
        stmt = self._visible(Action.LIST, caller).order_by(*self.order_by())
        result = await self._bounded(self.db.execute(stmt))
        return list(result.scalars().all())

    async def count(self, caller: User) -> int:
        self.access.check(self.entity, Action.LIST, caller)
        stmt = self._visible(Action.LIST, caller, select(func.count()).select_from(self.model))
        result = await self._bounded(self.db.execute(stmt))
        return result.scalar_one()

    async def get(self, row_id: str, caller: User) -> ModelT:
        self.access.check(self.entity, Action.READ, caller)
        return await self._fetch(row_id, Action.READ, caller)

    async def create(self, data: Mapping[str, Any], caller: User) -> ModelT:
        rule = self.access.check(self.entity, Action.CREATE, caller)

        values = self._column_values(self.prepare_create(dict(data), caller))
        await self._check_references(values)
        if self.creator_column:
            values[self.creator_column] = caller.id

        restricted_to = self.access.owner_columns(self.entity, Action.CREATE, caller)
        if restricted_to and not self._owned_by(values, caller, restricted_to):
            values[rule.owner_columns[0]] = caller.id

        # The capability decides the tenant, never the payload.
        row = self.model(**values, company_id=self.company_id)
        self.db.add(row)
        await self._bounded(self.db.flush())
        await self._bounded(self.db.refresh(row))

        logger.info("Row created", entity=self.entity, row_id=row.id, company_id=row.company_id)
        return row

    async def update(self, row_id: str, data: Mapping[str, Any], caller: User) -> ModelT:
        self.check_update(row_id, data, caller)
        self.access.check(self.entity, Action.UPDATE, caller)
        row = await self._fetch(row_id, Action.UPDATE, caller)

        values = self._column_values(self.prepare_update(row, dict(data), caller))

        restricted_to = self.access.owner_columns(self.entity, Action.UPDATE, caller)
        if restricted_to:
            after = {column: values.get(column, getattr(row, column)) for column in restricted_to}
            if not self._owned_by(after, caller, restricted_to):
                logger.warning(
                    "Ownership hand-off refused",
                    entity=self.entity,
                    row_id=row.id,
                    user_id=caller.id,
                )
                raise Forbidden("You cannot hand this record to another user")
        await self._check_references(values)

        for key, value in values.items():
            setattr(row, key, value)
        await self._bounded(self.db.flush())
        await self._bounded(self.db.refresh(row))

        logger.info("Row updated", entity=self.entity, row_id=row.id, fields=sorted(values))
        return row

    async def delete(self, row_id: str, caller: User) -> None:
        self.check_delete(row_id, caller)
        self.access.check(self.entity, Action.DELETE, caller)
        row = await self._fetch(row_id, Action.DELETE, caller)

        await self._bounded(self.db.delete(row))
        await self._bounded(self.db.flush())
        logger.info("Row deleted", entity=self.entity, row_id=row_id, company_id=row.company_id)

"""
repositories/users.py
---------------------
Principal records.

On top of the generic scoping rules:
  - nobody changes the role on their own record (SelfEscalationBlocked)
  - nobody deletes their own record (SelfDeletionBlocked)
Both are checked before tenant or role filtering and regardless of role.
"""

from typing import Any, Mapping

from sqlalchemy import select

from bizdesk.core.errors import SelfDeletionBlocked, SelfEscalationBlocked
from bizdesk.core.logging import get_logger
from bizdesk.core.security import hash_password
from bizdesk.models.user import User
from bizdesk.repositories.base import ScopedRepository
from bizdesk.tenancy.policy import Action

logger = get_logger(__name__)


def _role_value(role: Any) -> Any:
    return getattr(role, "value", role)


class UserRepository(ScopedRepository[User]):
    model = User
    entity = "users"
    label = "user"

    def prepare_create(self, data: dict[str, Any], caller: User) -> dict[str, Any]:
        password = data.pop("password", None)
        if password is not None:
            data["hashed_password"] = hash_password(password)
        data["email"] = data["email"].lower()
        if "role" in data:
            data["role"] = _role_value(data["role"])
        return data

    def prepare_update(self, row: User, data: dict[str, Any], caller: User) -> dict[str, Any]:
        password = data.pop("password", None)
        if password:
            data["hashed_password"] = hash_password(password)
        if data.get("email"):
            data["email"] = data["email"].lower()
        if "role" in data:
            data["role"] = _role_value(data["role"])
        return data

    def check_update(self, row_id: str, data: Mapping[str, Any], caller: User) -> None:
        role = data.get("role")
        if row_id == caller.id and role is not None and _role_value(role) != caller.role:
            logger.warning("Self role change blocked", user_id=caller.id)
            raise SelfEscalationBlocked()

    def check_delete(self, row_id: str, caller: User) -> None:
        if row_id == caller.id:
            logger.warning("Self deletion blocked", user_id=caller.id)
            raise SelfDeletionBlocked()

    async def _ensure_email_free(self, email: str, exclude_id: str | None = None) -> None:
        # E-mail is globally unique; check before flushing so a duplicate does
        # not poison the request's session with a failed transaction.
        existing = await self._bounded(find_user_by_email(self.db, email))
        if existing is not None and existing.id != exclude_id:
            raise ValueError(f"Email '{email}' is already registered")

    async def create(self, data: Mapping[str, Any], caller: User) -> User:
        # Role first: callers who may not create users learn nothing about
        # which addresses exist.
        self.access.check(self.entity, Action.CREATE, caller)
        await self._ensure_email_free(data["email"])
        return await super().create(data, caller)

    async def update(self, row_id: str, data: Mapping[str, Any], caller: User) -> User:
        self.check_update(row_id, data, caller)
        self.access.check(self.entity, Action.UPDATE, caller)
        if data.get("email"):
            await self._fetch(row_id, Action.UPDATE, caller)
            await self._ensure_email_free(data["email"], exclude_id=row_id)
        return await super().update(row_id, data, caller)


async def find_user_by_email(db, email: str) -> User | None:
    """Unscoped lookup used only by the login endpoint."""
    result = await db.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def find_user_by_id(db, user_id: str) -> User | None:
    """Unscoped lookup used only to load the principal behind a session."""
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()

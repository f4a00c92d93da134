"""
models/user.py
--------------
User (principal) ORM model with roles and home-tenant binding.

Role design:
  - admin, ceo, manager: full visibility and mutation rights inside the
    tenant they are scoped to.
  - staff, agency, client: restricted to rows they own (assignee,
    creator, agency or client column, depending on the entity).

company_id is the user's home tenant. NULL marks a platform operator,
the only kind of principal allowed to use the root-domain view.

The hashed_password column stores bcrypt hashes only; plain text is
never stored and never logged.
"""

from enum import Enum as PyEnum
from typing import Optional

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from bizdesk.db.base import Base, TenantOwnedMixin, TimestampMixin, generate_uuid


class UserRole(str, PyEnum):
    admin = "admin"
    ceo = "ceo"
    manager = "manager"
    staff = "staff"
    agency = "agency"
    client = "client"


class User(Base, TenantOwnedMixin, TimestampMixin):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=UserRole.client.value
    )
    phone: Mapped[Optional[str]] = mapped_column(String(50))
    department: Mapped[Optional[str]] = mapped_column(String(255))
    position: Mapped[Optional[str]] = mapped_column(String(255))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    @property
    def is_platform_operator(self) -> bool:
        return self.company_id is None

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email} role={self.role}>"

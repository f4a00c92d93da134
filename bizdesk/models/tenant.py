"""
models/tenant.py
----------------
Tenant (company) ORM model.

Each company is an isolated organisational unit reached through its own
subdomain (`<slug>.<root-domain>`). All data belonging to a company is
scoped by company_id at the query level; dependent rows reference it with
ON DELETE CASCADE, so deleting a company removes its data in the database
itself.
"""

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bizdesk.db.base import Base, TimestampMixin, generate_uuid


class Company(Base, TimestampMixin):
    __tablename__ = "companies"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    slug: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Branding
    logo_url: Mapped[Optional[str]] = mapped_column(Text)
    primary_color: Mapped[str] = mapped_column(String(20), default="#3B82F6", nullable=False)
    secondary_color: Mapped[str] = mapped_column(String(20), default="#1E40AF", nullable=False)

    # Contact details shown on invoices and the tenant settings page
    email: Mapped[Optional[str]] = mapped_column(String(320))
    phone: Mapped[Optional[str]] = mapped_column(String(50))
    address: Mapped[Optional[str]] = mapped_column(Text)
    website: Mapped[Optional[str]] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<Company id={self.id} slug={self.slug}>"

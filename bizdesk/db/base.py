"""
db/base.py
----------
Declarative base and shared mixins.

TimestampMixin:     Adds created_at / updated_at columns to any model.
TenantOwnedMixin:   Adds the nullable company_id foreign key carried by
                    every scoped business table. The FK cascades on
                    tenant deletion, so removing a company never depends
                    on a hand-maintained list of dependent tables.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


class TimestampMixin:
    """Adds server-side created_at and updated_at timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class TenantOwnedMixin:
    """Optional tenant binding; NULL means a global (platform) row."""

    @declared_attr
    def company_id(cls) -> Mapped[Optional[str]]:
        return mapped_column(
            String(36),
            ForeignKey("companies.id", ondelete="CASCADE"),
            nullable=True,
            index=True,
        )


def generate_uuid() -> str:
    return str(uuid.uuid4())


def user_fk(ondelete: str = "SET NULL", nullable: bool = True):
    """Ownership column referencing users.id."""
    return mapped_column(
        String(36),
        ForeignKey("users.id", ondelete=ondelete),
        nullable=nullable,
        index=True,
    )


def drop_required_nulls(model, data: dict) -> dict:
    """
    Remove explicit None values aimed at NOT NULL columns.

    Partial updates send only the fields a client set; a null for a
    required column means "no change", never "clear it".
    """
    columns = model.__mapper__.columns
    return {
        key: value
        for key, value in data.items()
        if value is not None or key not in columns or columns[key].nullable
    }

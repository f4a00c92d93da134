"""
models/client.py
----------------
Projects and invoices shown to client-role users in their portal.
Invoice numbering is handled by the invoicing collaborator; this table
only stores the number it was given.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bizdesk.db.base import Base, TenantOwnedMixin, TimestampMixin, generate_uuid, user_fk


class ClientProject(Base, TenantOwnedMixin, TimestampMixin):
    __tablename__ = "client_projects"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    client_id: Mapped[Optional[str]] = user_fk(ondelete="CASCADE")
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(50), default="active", nullable=False)
    budget: Mapped[Optional[Decimal]] = mapped_column(Numeric(15, 2))
    start_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    end_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))


class ClientInvoice(Base, TenantOwnedMixin, TimestampMixin):
    __tablename__ = "client_invoices"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    client_id: Mapped[Optional[str]] = user_fk(ondelete="CASCADE")
    invoice_number: Mapped[str] = mapped_column(String(50), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    status: Mapped[str] = mapped_column(String(50), default="pending", nullable=False)
    due_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    paid_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    notes: Mapped[Optional[str]] = mapped_column(Text)

"""
models/finance.py
-----------------
Business lines, agency sales and investments.

Monetary columns use NUMERIC(15, 2); they round-trip as Decimal.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from bizdesk.db.base import Base, TenantOwnedMixin, TimestampMixin, generate_uuid, user_fk


class Business(Base, TenantOwnedMixin, TimestampMixin):
    __tablename__ = "businesses"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    url: Mapped[Optional[str]] = mapped_column(Text)
    target_revenue: Mapped[Optional[Decimal]] = mapped_column(Numeric(15, 2))
    status: Mapped[str] = mapped_column(String(50), default="active", nullable=False)


class AgencySale(Base, TenantOwnedMixin, TimestampMixin):
    __tablename__ = "agency_sales"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    agency_id: Mapped[Optional[str]] = user_fk(ondelete="CASCADE")
    business_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("businesses.id", ondelete="SET NULL")
    )
    customer_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("customers.id", ondelete="SET NULL")
    )
    client_name: Mapped[Optional[str]] = mapped_column(String(255))
    project_name: Mapped[Optional[str]] = mapped_column(String(255))
    amount: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    commission: Mapped[Optional[Decimal]] = mapped_column(Numeric(15, 2))
    status: Mapped[str] = mapped_column(String(50), default="pending", nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    sale_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class Investment(Base, TenantOwnedMixin, TimestampMixin):
    __tablename__ = "investments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    business_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("businesses.id", ondelete="SET NULL")
    )
    type: Mapped[str] = mapped_column(String(50), default="asset_purchase", nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String(100))
    amount: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    investment_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    created_by: Mapped[Optional[str]] = user_fk()

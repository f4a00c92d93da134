"""
models/staff.py
---------------
HR record attached to a user account.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bizdesk.db.base import Base, TenantOwnedMixin, TimestampMixin, generate_uuid, user_fk


class Employee(Base, TenantOwnedMixin, TimestampMixin):
    __tablename__ = "employees"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    user_id: Mapped[Optional[str]] = user_fk(ondelete="CASCADE")
    employee_number: Mapped[str] = mapped_column(String(64), nullable=False)
    hire_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    salary: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2))
    emergency_contact: Mapped[Optional[str]] = mapped_column(String(255))
    emergency_phone: Mapped[Optional[str]] = mapped_column(String(50))
    notes: Mapped[Optional[str]] = mapped_column(Text)

"""
schemas/staff.py
----------------
Employee HR records. employee_number is generated when left blank.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class EmployeeCreate(BaseModel):
    user_id: Optional[str] = None
    employee_number: Optional[str] = None
    hire_date: Optional[datetime] = None
    salary: Optional[Decimal] = None
    emergency_contact: Optional[str] = None
    emergency_phone: Optional[str] = None
    notes: Optional[str] = None


class EmployeeUpdate(EmployeeCreate):
    pass


class EmployeeRead(BaseModel):
    id: str
    company_id: Optional[str]
    user_id: Optional[str]
    employee_number: str
    hire_date: Optional[datetime]
    salary: Optional[Decimal]
    emergency_contact: Optional[str]
    emergency_phone: Optional[str]
    notes: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True}

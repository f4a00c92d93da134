"""
schemas/client.py
-----------------
Client portal: projects and invoices.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class ClientProjectCreate(BaseModel):
    client_id: str
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    status: str = "active"
    budget: Optional[Decimal] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class ClientProjectUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[str] = None
    budget: Optional[Decimal] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class ClientProjectRead(BaseModel):
    id: str
    company_id: Optional[str]
    client_id: Optional[str]
    name: str
    description: Optional[str]
    status: str
    budget: Optional[Decimal]
    start_date: Optional[datetime]
    end_date: Optional[datetime]
    created_at: datetime

    model_config = {"from_attributes": True}


class ClientInvoiceCreate(BaseModel):
    client_id: str
    invoice_number: str = Field(..., min_length=1, max_length=50)
    amount: Decimal
    status: str = "pending"
    due_date: datetime
    notes: Optional[str] = None


class ClientInvoiceUpdate(BaseModel):
    amount: Optional[Decimal] = None
    status: Optional[str] = None
    due_date: Optional[datetime] = None
    paid_date: Optional[datetime] = None
    notes: Optional[str] = None


class ClientInvoiceRead(BaseModel):
    id: str
    company_id: Optional[str]
    client_id: Optional[str]
    invoice_number: str
    amount: Decimal
    status: str
    due_date: datetime
    paid_date: Optional[datetime]
    notes: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True}

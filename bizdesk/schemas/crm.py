"""
schemas/crm.py
--------------
Customers and leads.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class CustomerCreate(BaseModel):
    company_name: str = Field(..., min_length=1, max_length=255)
    contact_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    status: str = "active"
    notes: Optional[str] = None
    assigned_to: Optional[str] = None


class CustomerUpdate(BaseModel):
    company_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    contact_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None
    assigned_to: Optional[str] = None


class CustomerRead(BaseModel):
    id: str
    company_id: Optional[str]
    company_name: str
    contact_name: Optional[str]
    email: Optional[str]
    phone: Optional[str]
    address: Optional[str]
    status: str
    notes: Optional[str]
    assigned_to: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True}


class LeadCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    company: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    source: Optional[str] = None
    status: str = "new"
    score: int = 0
    notes: Optional[str] = None
    assigned_to: Optional[str] = None


class LeadUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    company: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    source: Optional[str] = None
    status: Optional[str] = None
    score: Optional[int] = None
    notes: Optional[str] = None
    last_contacted_at: Optional[datetime] = None
    assigned_to: Optional[str] = None


class LeadRead(BaseModel):
    id: str
    company_id: Optional[str]
    name: str
    company: Optional[str]
    email: Optional[str]
    phone: Optional[str]
    website: Optional[str]
    source: Optional[str]
    status: str
    score: int
    notes: Optional[str]
    last_contacted_at: Optional[datetime]
    assigned_to: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True}

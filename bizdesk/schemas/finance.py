"""
schemas/finance.py
------------------
Businesses, agency sales and investments.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class BusinessCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    url: Optional[str] = None
    target_revenue: Optional[Decimal] = None
    status: str = "active"


class BusinessUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    url: Optional[str] = None
    target_revenue: Optional[Decimal] = None
    status: Optional[str] = None


class BusinessRead(BaseModel):
    id: str
    company_id: Optional[str]
    name: str
    description: Optional[str]
    url: Optional[str]
    target_revenue: Optional[Decimal]
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}


class AgencySaleCreate(BaseModel):
    business_id: Optional[str] = None
    customer_id: Optional[str] = None
    client_name: Optional[str] = None
    project_name: Optional[str] = None
    amount: Decimal
    commission: Optional[Decimal] = None
    status: str = "pending"
    description: Optional[str] = None


class AgencySaleUpdate(BaseModel):
    client_name: Optional[str] = None
    project_name: Optional[str] = None
    amount: Optional[Decimal] = None
    commission: Optional[Decimal] = None
    status: Optional[str] = None
    description: Optional[str] = None


class AgencySaleRead(BaseModel):
    id: str
    company_id: Optional[str]
    agency_id: Optional[str]
    business_id: Optional[str]
    customer_id: Optional[str]
    client_name: Optional[str]
    project_name: Optional[str]
    amount: Decimal
    commission: Optional[Decimal]
    status: str
    description: Optional[str]
    sale_date: datetime

    model_config = {"from_attributes": True}


class InvestmentCreate(BaseModel):
    business_id: Optional[str] = None
    type: str = "asset_purchase"
    category: Optional[str] = None
    amount: Decimal
    description: Optional[str] = None
    investment_date: Optional[datetime] = None


class InvestmentUpdate(BaseModel):
    type: Optional[str] = None
    category: Optional[str] = None
    amount: Optional[Decimal] = None
    description: Optional[str] = None
    investment_date: Optional[datetime] = None


class InvestmentRead(BaseModel):
    id: str
    company_id: Optional[str]
    business_id: Optional[str]
    type: str
    category: Optional[str]
    amount: Decimal
    description: Optional[str]
    investment_date: datetime
    created_by: Optional[str]

    model_config = {"from_attributes": True}

"""
schemas/tenant.py
-----------------
Pydantic request/response models for Company (tenant).

Naming convention:
  CompanyCreate  → inbound request body
  CompanyRead    → outbound response body (never exposes internal fields)
  TenantBranding → what the UI needs to theme itself for the current host
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

SLUG_PATTERN = r"^[a-z0-9](?:[a-z0-9-]{0,98}[a-z0-9])?$"


class CompanyCreate(BaseModel):
    slug: str = Field(
        ...,
        max_length=100,
        pattern=SLUG_PATTERN,
        examples=["acme"],
        description="Subdomain label: <slug>.<root-domain>",
    )
    name: str = Field(..., min_length=2, max_length=255, examples=["Acme Corp"])
    logo_url: Optional[str] = None
    primary_color: str = Field(default="#3B82F6", max_length=20)
    secondary_color: str = Field(default="#1E40AF", max_length=20)
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    website: Optional[str] = None

    @field_validator("slug", mode="before")
    @classmethod
    def lower_slug(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()


class CompanyUpdate(BaseModel):
    slug: Optional[str] = Field(default=None, max_length=100, pattern=SLUG_PATTERN)
    name: Optional[str] = Field(default=None, min_length=2, max_length=255)
    logo_url: Optional[str] = None
    primary_color: Optional[str] = Field(default=None, max_length=20)
    secondary_color: Optional[str] = Field(default=None, max_length=20)
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    website: Optional[str] = None

    @field_validator("slug", mode="before")
    @classmethod
    def lower_slug(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class CompanyRead(BaseModel):
    id: str
    slug: str
    name: str
    logo_url: Optional[str]
    primary_color: str
    secondary_color: str
    email: Optional[str]
    phone: Optional[str]
    address: Optional[str]
    website: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True}


class TenantBranding(BaseModel):
    id: Optional[str]
    slug: Optional[str]
    name: str
    logo_url: Optional[str] = None
    primary_color: str = "#3B82F6"
    secondary_color: str = "#1E40AF"
    scope: str

    model_config = {"from_attributes": True}

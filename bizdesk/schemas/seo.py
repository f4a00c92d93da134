"""
schemas/seo.py
--------------
SEO categories and articles. An article slug is generated when omitted.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class SeoCategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


class SeoCategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    slug: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None


class SeoCategoryRead(BaseModel):
    id: str
    company_id: Optional[str]
    name: str
    slug: str
    description: Optional[str]

    model_config = {"from_attributes": True}


class SeoArticleCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(default=None, max_length=255)
    content: str
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    keywords: Optional[str] = None
    category_id: Optional[str] = None
    status: str = "draft"


class SeoArticleUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    slug: Optional[str] = Field(default=None, max_length=255)
    content: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    keywords: Optional[str] = None
    category_id: Optional[str] = None
    status: Optional[str] = None
    is_published: Optional[bool] = None
    published_at: Optional[datetime] = None


class SeoArticleRead(BaseModel):
    id: str
    company_id: Optional[str]
    title: str
    slug: str
    content: str
    meta_title: Optional[str]
    meta_description: Optional[str]
    keywords: Optional[str]
    category_id: Optional[str]
    status: str
    is_published: bool
    published_at: Optional[datetime]
    user_id: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True}

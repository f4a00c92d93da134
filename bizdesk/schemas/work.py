"""
schemas/work.py
---------------
Tasks, calendar memos and quick notes.
created_by / user_id are stamped from the session and never read from input.
"""

from datetime import date as date_type, datetime
from typing import Optional

from pydantic import BaseModel, Field


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    status: str = "pending"
    priority: str = "medium"
    category: str = "direct"
    due_date: Optional[datetime] = None
    business_id: Optional[str] = None
    customer_id: Optional[str] = None
    assigned_to: Optional[str] = None


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    category: Optional[str] = None
    due_date: Optional[datetime] = None
    business_id: Optional[str] = None
    customer_id: Optional[str] = None
    assigned_to: Optional[str] = None


class TaskRead(BaseModel):
    id: str
    company_id: Optional[str]
    title: str
    description: Optional[str]
    status: str
    priority: str
    category: str
    due_date: Optional[datetime]
    business_id: Optional[str]
    customer_id: Optional[str]
    assigned_to: Optional[str]
    created_by: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True}


class MemoCreate(BaseModel):
    date: date_type
    content: str = Field(..., min_length=1)
    color: str = "blue"


class MemoUpdate(BaseModel):
    date: Optional[date_type] = None
    content: Optional[str] = Field(default=None, min_length=1)
    color: Optional[str] = None


class MemoRead(BaseModel):
    id: str
    company_id: Optional[str]
    date: date_type
    content: str
    color: str
    user_id: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True}


class QuickNoteCreate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=255)
    content: str = Field(..., min_length=1)
    color: str = "yellow"
    is_pinned: bool = False


class QuickNoteUpdate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=255)
    content: Optional[str] = Field(default=None, min_length=1)
    color: Optional[str] = None
    is_pinned: Optional[bool] = None


class QuickNoteRead(BaseModel):
    id: str
    company_id: Optional[str]
    title: Optional[str]
    content: str
    color: str
    is_pinned: bool
    user_id: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True}

"""
schemas/ai.py
-------------
AI call logs and assistant conversation turns.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


class AiLogCreate(BaseModel):
    type: str = Field(..., min_length=1, max_length=50, examples=["seo_article"])
    prompt: Optional[str] = None
    result: Optional[str] = None
    status: str = "success"
    extra: Optional[str] = Field(default=None, description="Free-form JSON metadata")


class AiLogUpdate(BaseModel):
    result: Optional[str] = None
    status: Optional[str] = None
    extra: Optional[str] = None


class AiLogRead(BaseModel):
    id: str
    company_id: Optional[str]
    type: str
    prompt: Optional[str]
    result: Optional[str]
    status: str
    extra: Optional[str]
    user_id: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True}


class AiConversationCreate(BaseModel):
    role: Literal["user", "assistant"]
    content: str = Field(..., min_length=1)


class AiConversationUpdate(BaseModel):
    content: Optional[str] = Field(default=None, min_length=1)


class AiConversationRead(BaseModel):
    id: str
    company_id: Optional[str]
    role: str
    content: str
    user_id: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True}

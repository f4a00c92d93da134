"""
schemas/user.py
---------------
Pydantic models for users, login and the session-backed profile.

Security note:
  - hashed_password is NEVER included in any response schema.
  - company_id is not accepted on input: the request scope decides it.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from bizdesk.models.user import UserRole


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    name: str = Field(..., min_length=1, max_length=255)
    role: UserRole = UserRole.client
    phone: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None


class UserUpdate(BaseModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=8, max_length=128)
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    role: Optional[UserRole] = None
    phone: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    is_active: Optional[bool] = None


class UserRead(BaseModel):
    id: str
    email: str
    name: str
    role: str
    company_id: Optional[str]
    phone: Optional[str]
    department: Optional[str]
    position: Optional[str]
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class LoginRequest(BaseModel):
    email: EmailStr
    password: str

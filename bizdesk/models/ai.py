"""
models/ai.py
------------
Audit trail of AI generation calls and per-user assistant conversations.
The generation providers themselves are external collaborators.
"""

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bizdesk.db.base import Base, TenantOwnedMixin, TimestampMixin, generate_uuid, user_fk


class AiLog(Base, TenantOwnedMixin, TimestampMixin):
    __tablename__ = "ai_logs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    prompt: Mapped[Optional[str]] = mapped_column(Text)
    result: Mapped[Optional[str]] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(50), default="success", nullable=False)
    extra: Mapped[Optional[str]] = mapped_column("metadata", Text)
    user_id: Mapped[Optional[str]] = user_fk()


class AiConversation(Base, TenantOwnedMixin, TimestampMixin):
    __tablename__ = "ai_conversations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    role: Mapped[str] = mapped_column(String(20), nullable=False)  # user | assistant
    content: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[Optional[str]] = user_fk(ondelete="CASCADE")

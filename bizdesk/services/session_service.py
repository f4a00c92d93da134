"""
services/session_service.py
---------------------------
Server-side sessions behind an opaque cookie.

The cookie holds nothing but a random token. The user_sessions row keeps
{principal, company, tenant slug} for SESSION_TTL_HOURS and is deleted on
logout. The row is read once per request (the dependency result is cached
by FastAPI) and written only on login / logout.

In production the cookie is issued for `.<ROOT_DOMAIN>` so every tenant
subdomain shares it; scope resolution still consults the host first.
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import Response
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.core.config import settings
from bizdesk.core.logging import get_logger
from bizdesk.core.security import new_session_token, session_expiry
from bizdesk.models.session import UserSession
from bizdesk.models.user import User
from bizdesk.tenancy.scope import ScopeContext

logger = get_logger(__name__)


class SessionBinder:

    @staticmethod
    async def open(db: AsyncSession, user: User, scope: ScopeContext) -> UserSession:
        """
        Persist a new session for `user`.
        The remembered tenant is the one the host bound, falling back to the
        user's home tenant.
        """
        company_id = scope.company_id or user.company_id
        session = UserSession(
            id=new_session_token(),
            user_id=user.id,
            company_id=company_id,
            tenant_slug=scope.slug if scope.company_id else None,
            expires_at=session_expiry(),
        )
        db.add(session)
        await db.flush()
        logger.info("Session opened", user_id=user.id, company_id=company_id)
        return session

    @staticmethod
    async def load(db: AsyncSession, token: Optional[str]) -> Optional[UserSession]:
        if not token:
            return None
        result = await db.execute(
            select(UserSession).where(
                UserSession.id == token,
                UserSession.expires_at > datetime.now(timezone.utc),
            )
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def close(db: AsyncSession, token: Optional[str]) -> None:
        if not token:
            return
        await db.execute(delete(UserSession).where(UserSession.id == token))
        logger.info("Session closed")

    @staticmethod
    async def purge_expired(db: AsyncSession) -> int:
        result = await db.execute(
            delete(UserSession).where(UserSession.expires_at <= datetime.now(timezone.utc))
        )
        return result.rowcount

    # ── Cookie helpers ────────────────────────────────────────────────────────

    @staticmethod
    def set_cookie(response: Response, session: UserSession) -> None:
        response.set_cookie(
            key=settings.SESSION_COOKIE_NAME,
            value=session.id,
            max_age=settings.SESSION_TTL_HOURS * 3600,
            httponly=True,
            secure=settings.is_production,
            samesite="lax",
            domain=f".{settings.ROOT_DOMAIN}" if settings.is_production else None,
        )

    @staticmethod
    def clear_cookie(response: Response) -> None:
        response.delete_cookie(
            key=settings.SESSION_COOKIE_NAME,
            httponly=True,
            secure=settings.is_production,
            samesite="lax",
            domain=f".{settings.ROOT_DOMAIN}" if settings.is_production else None,
        )

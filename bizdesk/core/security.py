"""
core/security.py
----------------
Password hashing and session token utilities.

Design decisions:
  - bcrypt work factor 12 (good balance of security vs latency)
  - Session tokens are opaque random strings; everything the server
    needs (principal, tenant) lives in the user_sessions table, so a
    token carries no claims and cannot be forged into another scope.
"""

import secrets
from datetime import datetime, timedelta, timezone

from passlib.context import CryptContext

from bizdesk.core.config import settings

# bcrypt context: 12 rounds (OWASP minimum) unless overridden for tests
pwd_context = CryptContext(
    schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS
)


# ── Password Utilities ────────────────────────────────────────────────────────

def hash_password(plain: str) -> str:
    """Return a bcrypt hash of the plain-text password."""
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """Constant-time comparison of plain password against stored hash."""
    return pwd_context.verify(plain, hashed)


# ── Session Token Utilities ──────────────────────────────────────────────────

def new_session_token() -> str:
    return secrets.token_urlsafe(32)


def session_expiry(now: datetime | None = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now + timedelta(hours=settings.SESSION_TTL_HOURS)

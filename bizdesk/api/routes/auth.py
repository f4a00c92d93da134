"""
api/routes/auth.py
------------------
Session authentication endpoints.

POST /api/auth/login   — Verify credentials and open a server-side session.
                         The session remembers the tenant the host bound.
POST /api/auth/logout  — Delete the session and clear the cookie.
GET  /api/auth/me      — Return the authenticated user's profile.

Logging into a tenant subdomain is only possible for that tenant's users
and platform operators.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.core.config import settings
from bizdesk.core.logging import get_logger
from bizdesk.core.security import verify_password
from bizdesk.db.session import get_db
from bizdesk.dependencies import ensure_principal_in_scope, get_current_user, get_scope
from bizdesk.models.user import User
from bizdesk.repositories.users import find_user_by_email
from bizdesk.schemas.user import LoginRequest, UserRead
from bizdesk.services.session_service import SessionBinder
from bizdesk.tenancy.scope import ScopeContext

logger = get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])

_INVALID_CREDENTIALS = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid email or password",
)


@router.post("/login", response_model=UserRead, summary="Login and open a session")
async def login(
    body: LoginRequest,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    scope: Annotated[ScopeContext, Depends(get_scope)],
) -> UserRead:
    user: Optional[User] = await find_user_by_email(db, body.email)
    if user is None or not verify_password(body.password, user.hashed_password):
        logger.warning("Login failed", email=body.email)
        raise _INVALID_CREDENTIALS
    if not user.is_active:
        logger.warning("Login refused for inactive user", user_id=user.id)
        raise _INVALID_CREDENTIALS

    ensure_principal_in_scope(user, scope)

    session = await SessionBinder.open(db, user, scope)
    SessionBinder.set_cookie(response, session)
    logger.info("User logged in", user_id=user.id, role=user.role)
    return UserRead.model_validate(user)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT, summary="Close the session")
async def logout(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Response:
    await SessionBinder.close(db, request.cookies.get(settings.SESSION_COOKIE_NAME))
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    SessionBinder.clear_cookie(response)
    return response


@router.get("/me", response_model=UserRead, summary="Get the currently authenticated user")
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserRead:
    return UserRead.model_validate(current_user)

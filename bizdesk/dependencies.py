"""
dependencies.py
---------------
FastAPI dependency injection functions that turn a request into a scope,
a principal, and scoped repositories.

Flow:
  1. get_tenant_resolution classifies the Host header and looks the slug up.
  2. get_user_session loads the server-side session behind the cookie.
  3. get_scope combines both into a ScopeContext (host first, then session)
     and binds it into the structlog context.
  4. get_current_user loads the principal behind the session.
  5. get_scoped_user additionally refuses a principal acting outside its
     home tenant; only platform operators cross tenants or use the root view.
  6. repository(...) builds a repository bound to the capability that the
     router's ScopeMode allows for this scope.

FastAPI caches each dependency per request, so the session row and the
tenant lookup are read once however many dependencies ask for them.
"""

from typing import Annotated, Callable, Optional, TypeVar

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.core.config import settings
from bizdesk.core.errors import Forbidden, NotAuthenticated
from bizdesk.core.logging import bind_request_context, get_logger
from bizdesk.db.session import get_db
from bizdesk.models.session import UserSession
from bizdesk.models.user import User
from bizdesk.repositories.base import ScopedRepository
from bizdesk.repositories.users import find_user_by_id
from bizdesk.services.session_service import SessionBinder
from bizdesk.tenancy.resolver import TenantResolution, tenant_resolver
from bizdesk.tenancy.scope import ScopeContext, ScopeMode, capability_for, resolve_scope

logger = get_logger(__name__)

RepoT = TypeVar("RepoT", bound=ScopedRepository)


async def get_tenant_resolution(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TenantResolution:
    return await tenant_resolver.resolve(db, request.headers.get("host"))


async def get_user_session(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Optional[UserSession]:
    return await SessionBinder.load(db, request.cookies.get(settings.SESSION_COOKIE_NAME))


async def get_scope(
    request: Request,
    resolution: Annotated[TenantResolution, Depends(get_tenant_resolution)],
    session: Annotated[Optional[UserSession], Depends(get_user_session)],
) -> ScopeContext:
    """
    Resolve the per-request ScopeContext.
    Raises TenantNotFound for an unknown slug when UNKNOWN_SLUG_POLICY=reject.
    """
    scope = resolve_scope(resolution, session, settings.UNKNOWN_SLUG_POLICY)
    bind_request_context(
        tenant_slug=scope.slug,
        company_id=scope.company_id,
        scope_source=scope.source.value,
    )
    request.state.scope = scope
    request.state.tenant = scope.tenant
    return scope


async def get_current_user(
    session: Annotated[Optional[UserSession], Depends(get_user_session)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """
    Load the principal behind the session cookie.
    Raises 401 when there is no live session or the user is gone / disabled.
    """
    if session is None:
        raise NotAuthenticated()

    user = await find_user_by_id(db, session.user_id)
    if user is None or not user.is_active:
        logger.warning("Session principal missing or inactive", user_id=session.user_id)
        raise NotAuthenticated()
    return user


def ensure_principal_in_scope(user: User, scope: ScopeContext) -> None:
    if user.is_platform_operator:
        return
    if scope.company_id != user.company_id:
        logger.warning(
            "Principal outside its tenant",
            user_id=user.id,
            home_company_id=user.company_id,
        )
        raise Forbidden("Your account does not belong to this tenant")


async def get_scoped_user(
    user: Annotated[User, Depends(get_current_user)],
    scope: Annotated[ScopeContext, Depends(get_scope)],
) -> User:
    ensure_principal_in_scope(user, scope)
    return user


def repository(repo_cls: type[RepoT], mode: ScopeMode) -> Callable[..., RepoT]:
    """
    Dependency factory: a `repo_cls` bound to the capability `mode` allows.

    The mode is fixed here, where the router is declared; handlers receive
    a ready repository and never look at company ids themselves.
    """

    async def provide(
        db: Annotated[AsyncSession, Depends(get_db)],
        scope: Annotated[ScopeContext, Depends(get_scope)],
    ) -> RepoT:
        return repo_cls(db, capability_for(scope, mode))

    provide.__name__ = f"provide_{repo_cls.__name__}"
    return provide


CurrentUser = Annotated[User, Depends(get_scoped_user)]

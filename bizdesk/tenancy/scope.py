"""
tenancy/scope.py
----------------
Per-request scope and the two repository capabilities derived from it.

Precedence used by resolve_scope (strict order):
  1. The host bound a tenant                  → that tenant's id.
  2. The host carries no tenant subdomain     → None (unrestricted root view).
     Session state is ignored here: the same cookie yields different
     scopes on different hosts.
  3. Subdomain with no matching tenant        → session.company_id or None,
     unless UNKNOWN_SLUG_POLICY is "reject", in which case TenantNotFound.

Routers declare a ScopeMode once at registration time; capability_for()
turns (scope, mode) into either TenantScoped(company_id) or Unrestricted().
Handlers never decide this themselves.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from bizdesk.core.errors import TenantNotFound, TenantScopeRequired
from bizdesk.models.session import UserSession
from bizdesk.tenancy.resolver import HostKind, TenantInfo, TenantResolution


class ScopeSource(str, Enum):
    HOST = "host"
    ROOT = "root"
    SESSION = "session"
    NONE = "none"


@dataclass(frozen=True)
class ScopeContext:
    company_id: Optional[str]
    source: ScopeSource
    host_kind: HostKind
    tenant: Optional[TenantInfo] = None
    slug: Optional[str] = None

    @property
    def is_unrestricted(self) -> bool:
        return self.company_id is None


def resolve_scope(
    resolution: TenantResolution,
    session: Optional[UserSession],
    unknown_slug_policy: str = "session_fallback",
) -> ScopeContext:
    host = resolution.host

    if resolution.tenant is not None:
        return ScopeContext(
            company_id=resolution.tenant.id,
            source=ScopeSource.HOST,
            host_kind=host.kind,
            tenant=resolution.tenant,
            slug=resolution.tenant.slug,
        )

    if host.kind is not HostKind.SUBDOMAIN:
        return ScopeContext(company_id=None, source=ScopeSource.ROOT, host_kind=host.kind)

    if unknown_slug_policy == "reject":
        raise TenantNotFound(f"Tenant '{host.slug}' not found")

    if session is not None and session.company_id:
        return ScopeContext(
            company_id=session.company_id,
            source=ScopeSource.SESSION,
            host_kind=host.kind,
            slug=session.tenant_slug,
        )
    return ScopeContext(
        company_id=None, source=ScopeSource.NONE, host_kind=host.kind, slug=host.slug
    )


# ── Capabilities ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class TenantScoped:
    company_id: str

    def __post_init__(self) -> None:
        if not self.company_id:
            raise TenantScopeRequired()


@dataclass(frozen=True)
class Unrestricted:
    company_id: None = None


Capability = Union[TenantScoped, Unrestricted]


class ScopeMode(str, Enum):
    # Only ever served inside a tenant.
    TENANT = "tenant"
    # Inside a tenant when one is bound; cross-tenant on the root domain.
    TENANT_OR_GLOBAL = "tenant_or_global"


def capability_for(scope: ScopeContext, mode: ScopeMode) -> Capability:
    if scope.company_id is not None:
        return TenantScoped(scope.company_id)
    if mode is ScopeMode.TENANT_OR_GLOBAL and scope.source is ScopeSource.ROOT:
        return Unrestricted()
    # TenantScoped(None) raises TenantScopeRequired
    return TenantScoped(scope.company_id)  # type: ignore[arg-type]

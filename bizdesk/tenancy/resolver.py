"""
tenancy/resolver.py
-------------------
Host header → tenant.

Host classification (after stripping the port and lower-casing):
  ROOT       <root> or www.<root>           → no tenant
  RESERVED   <reserved>.<root>              → no tenant
  SUBDOMAIN  <slug>.<root>                  → look the slug up
  FOREIGN    anything else (localhost, preview hosts, raw IPs) → no tenant

The resolver performs a single read against the companies table and never
looks at the session; combining the result with session state is the job
of tenancy.scope.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.core.config import settings
from bizdesk.core.logging import get_logger
from bizdesk.models.tenant import Company

logger = get_logger(__name__)


class HostKind(str, Enum):
    ROOT = "root"
    RESERVED = "reserved"
    SUBDOMAIN = "subdomain"
    FOREIGN = "foreign"


@dataclass(frozen=True)
class HostInfo:
    kind: HostKind
    slug: Optional[str] = None


@dataclass(frozen=True)
class TenantInfo:
    """The slice of a Company that is bound to a request."""

    id: str
    slug: str
    name: str
    logo_url: Optional[str]
    primary_color: str
    secondary_color: str

    @classmethod
    def from_company(cls, company: Company) -> "TenantInfo":
        return cls(
            id=company.id,
            slug=company.slug,
            name=company.name,
            logo_url=company.logo_url,
            primary_color=company.primary_color,
            secondary_color=company.secondary_color,
        )


@dataclass(frozen=True)
class TenantResolution:
    host: HostInfo
    tenant: Optional[TenantInfo] = None

    @property
    def has_tenant_subdomain(self) -> bool:
        return self.host.kind is HostKind.SUBDOMAIN


def strip_port(host: str) -> str:
    host = host.strip().lower()
    if host.startswith("["):  # IPv6 literal
        return host.split("]", 1)[0] + "]"
    return host.split(":", 1)[0].rstrip(".")


def classify_host(
    host: Optional[str],
    root_domain: Optional[str] = None,
    reserved: Optional[Iterable[str]] = None,
) -> HostInfo:
    root = (root_domain or settings.ROOT_DOMAIN).lower()
    reserved_labels = {label.lower() for label in (reserved or settings.RESERVED_SUBDOMAINS)}

    if not host:
        return HostInfo(HostKind.FOREIGN)

    hostname = strip_port(host)
    if hostname in (root, f"www.{root}"):
        return HostInfo(HostKind.ROOT)

    suffix = f".{root}"
    if hostname.endswith(suffix):
        # a.b.<root> resolves on its leftmost label
        slug = hostname[: -len(suffix)].split(".", 1)[0]
        if not slug:
            return HostInfo(HostKind.FOREIGN)
        if slug in reserved_labels:
            return HostInfo(HostKind.RESERVED, slug)
        return HostInfo(HostKind.SUBDOMAIN, slug)

    return HostInfo(HostKind.FOREIGN)


class TenantResolver:

    def __init__(
        self,
        root_domain: Optional[str] = None,
        reserved: Optional[Iterable[str]] = None,
    ) -> None:
        self.root_domain = root_domain
        self.reserved = reserved

    async def resolve(self, db: AsyncSession, host: Optional[str]) -> TenantResolution:
        info = classify_host(host, self.root_domain, self.reserved)
        if info.kind is not HostKind.SUBDOMAIN:
            return TenantResolution(host=info)

        result = await db.execute(select(Company).where(Company.slug == info.slug))
        company = result.scalar_one_or_none()
        if company is None:
            logger.warning("Subdomain did not match any tenant", slug=info.slug)
            return TenantResolution(host=info)

        return TenantResolution(host=info, tenant=TenantInfo.from_company(company))


tenant_resolver = TenantResolver()

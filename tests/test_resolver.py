"""Host header → tenant resolution."""

import pytest

from bizdesk.tenancy.resolver import HostKind, TenantResolver, classify_host, strip_port

ROOT = "bizdesk.test"


class TestClassifyHost:

    @pytest.mark.parametrize("host", ["bizdesk.test", "www.bizdesk.test", "BIZDESK.test:8443"])
    def test_root_domain_has_no_tenant(self, host):
        assert classify_host(host, ROOT).kind is HostKind.ROOT

    @pytest.mark.parametrize("label", ["www", "api", "admin", "app", "mail", "ftp"])
    def test_reserved_labels(self, label):
        info = classify_host(f"{label}.{ROOT}", ROOT, reserved=["www", "api", "admin", "app", "mail", "ftp"])
        # www.<root> is the root itself; the others are reserved subdomains
        assert info.kind in (HostKind.ROOT, HostKind.RESERVED)

    def test_subdomain_slug_is_lowercased_and_port_stripped(self):
        info = classify_host("Acme.Bizdesk.Test:3000", ROOT)
        assert info.kind is HostKind.SUBDOMAIN
        assert info.slug == "acme"

    def test_multi_label_subdomain_uses_leftmost_label(self):
        info = classify_host(f"a.b.{ROOT}", ROOT)
        assert info == classify_host(f"a.{ROOT}", ROOT)
        assert info.slug == "a"

    @pytest.mark.parametrize("host", ["localhost:5000", "preview-123.vercel.app", "10.0.0.1", "notbizdesk.test", None, ""])
    def test_foreign_hosts(self, host):
        assert classify_host(host, ROOT).kind is HostKind.FOREIGN

    def test_strip_port_keeps_ipv6_literal(self):
        assert strip_port("[::1]:8000") == "[::1]"


class TestTenantResolver:

    async def test_known_slug_binds_tenant(self, db, make_company):
        acme = await make_company("acme", "Acme Corp")
        resolution = await TenantResolver(ROOT).resolve(db, f"acme.{ROOT}")

        assert resolution.has_tenant_subdomain
        assert resolution.tenant.id == acme.id
        assert resolution.tenant.name == "Acme Corp"

    async def test_unknown_slug_binds_nothing(self, db, make_company):
        await make_company("acme")
        resolution = await TenantResolver(ROOT).resolve(db, f"ghost.{ROOT}")

        assert resolution.has_tenant_subdomain
        assert resolution.tenant is None
        assert resolution.host.slug == "ghost"

    async def test_root_host_is_not_looked_up(self, db, make_company):
        await make_company("www")
        resolution = await TenantResolver(ROOT).resolve(db, f"www.{ROOT}")

        assert resolution.host.kind is HostKind.ROOT
        assert resolution.tenant is None

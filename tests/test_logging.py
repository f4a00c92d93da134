"""Request-scoped logging context."""

import pytest
import structlog

from bizdesk.core.logging import _drop_unbound_context, bind_request_context


class TestRequestContext:

    def test_bind_replaces_previous_request(self):
        bind_request_context(tenant_slug="acme", company_id="acme-id", scope_source="host")
        bind_request_context(tenant_slug=None, company_id=None, scope_source="root")

        context = structlog.contextvars.get_contextvars()

        assert context == {"tenant_slug": None, "company_id": None, "scope_source": "root"}
        structlog.contextvars.clear_contextvars()

    def test_unresolved_fields_are_dropped_from_events(self):
        event = {"event": "Row created", "tenant_slug": None, "company_id": None, "scope_source": "root"}

        assert _drop_unbound_context(None, "info", event) == {"event": "Row created", "scope_source": "root"}

    def test_unknown_fields_are_refused(self):
        with pytest.raises(ValueError):
            bind_request_context(tenant="acme")

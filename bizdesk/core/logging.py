"""
core/logging.py
---------------
Structured logging using structlog.
DEBUG=true  → human-readable console output
DEBUG=false → JSON (for log aggregators like Datadog, CloudWatch)

Every event carries the tenancy context of the request that emitted it.
The scope dependency calls bind_request_context() once per request; the
merge_contextvars processor copies those fields into each event and
_drop_unbound_context removes the ones that were never resolved (root
domain requests have no tenant slug or company id).

Request fields:
  tenant_slug   slug bound by the host, or remembered by the session
  company_id    tenant the request is scoped to
  scope_source  host | root | session | none
"""

import logging
import sys

import structlog

from bizdesk.core.config import settings

REQUEST_CONTEXT_KEYS = ("tenant_slug", "company_id", "scope_source")


def _drop_unbound_context(logger, method_name, event_dict):
    for key in REQUEST_CONTEXT_KEYS:
        if key in event_dict and event_dict[key] is None:
            del event_dict[key]
    return event_dict


def configure_logging() -> None:
    log_level = logging.DEBUG if settings.DEBUG else logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)

    if not settings.DEBUG:
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    processors = [
        structlog.contextvars.merge_contextvars,
        _drop_unbound_context,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.dev.ConsoleRenderer() if settings.DEBUG else structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def bind_request_context(**fields) -> None:
    """
    Start a fresh request context. Anything bound by a previous request on
    the same task is cleared first.
    """
    unknown = set(fields) - set(REQUEST_CONTEXT_KEYS)
    if unknown:
        raise ValueError(f"Unknown request context fields: {sorted(unknown)}")
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**fields)


def get_logger(name: str = __name__):
    return structlog.get_logger(name)

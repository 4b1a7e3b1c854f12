"""structlog setup for the API process.

Every event carries the service name, environment and metafield namespace so
lines from several storefront deployments can share one log sink.
"""

import logging

import structlog

from arsenal.config import Settings

SERVICE_NAME = "rc-arsenal-api"

# Chatty per-request loggers from the Shopify HTTP client
_QUIET_LOGGERS = ("httpx", "httpcore")


def service_context(settings: Settings) -> structlog.types.Processor:
    """Build a processor that stamps deployment context onto each event."""
    context = {
        "service": SERVICE_NAME,
        "environment": settings.environment,
        "namespace": settings.metafield_namespace,
    }

    def add_service_context(_logger: object, _method: str, event_dict: dict) -> dict:
        for key, value in context.items():
            event_dict.setdefault(key, value)
        return event_dict

    return add_service_context


def setup_logging(settings: Settings) -> None:
    """Configure structlog; JSON lines unless log_format is "console"."""
    if settings.log_format == "console":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            service_context(settings),
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

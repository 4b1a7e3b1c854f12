"""structlog configuration for the API process."""

import logging

from arsenal.config import Settings
from arsenal.middleware.logging import SERVICE_NAME, service_context, setup_logging


def test_service_context_stamps_deployment_fields():
    processor = service_context(Settings(environment="production", metafield_namespace="rc_arsenal"))
    event = processor(None, "info", {"event": "leaderboard_built"})
    assert event == {
        "event": "leaderboard_built",
        "service": SERVICE_NAME,
        "environment": "production",
        "namespace": "rc_arsenal",
    }


def test_service_context_keeps_explicit_fields():
    processor = service_context(Settings(environment="production"))
    event = processor(None, "info", {"event": "x", "environment": "override"})
    assert event["environment"] == "override"


def test_http_client_loggers_quieted():
    setup_logging(Settings(log_format="console", log_level="DEBUG"))
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING

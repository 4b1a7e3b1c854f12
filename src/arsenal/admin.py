"""Shared-secret check for admin endpoints."""

from __future__ import annotations

import secrets

from arsenal.config import Settings
from arsenal.errors import AuthorizationError


def verify_admin_secret(provided: object, settings: Settings) -> None:
    """Raise AuthorizationError unless ``provided`` equals the configured secret.

    An unconfigured (empty) secret rejects every request, as does a
    non-string ``provided`` value.
    """
    expected = settings.admin_secret
    if not expected or not isinstance(provided, str):
        raise AuthorizationError("Invalid admin secret")
    if not secrets.compare_digest(provided.encode(), expected.encode()):
        raise AuthorizationError("Invalid admin secret")

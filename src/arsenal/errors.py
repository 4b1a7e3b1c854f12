"""Error taxonomy shared by the store client, the services and the HTTP layer.

Every error carries the HTTP status it maps to and a short public ``error``
string; ``message`` holds the diagnostic detail (upstream message, missing
field, ...).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A single attribute write rejected by the store."""

    field: list[str] | None
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class ArsenalError(Exception):
    """Base class for every failure surfaced to API callers."""

    status_code = 500
    error = "Internal server error"

    def __init__(self, message: str = "", error: str | None = None) -> None:
        super().__init__(message or self.error)
        self.message = message or self.error
        if error is not None:
            self.error = error

    def to_content(self) -> dict:
        return {"success": False, "error": self.error, "message": self.message}


class ValidationError(ArsenalError):
    """Required input missing or malformed. Raised before any store call."""

    status_code = 400
    error = "Invalid request"


class AuthorizationError(ArsenalError):
    status_code = 401
    error = "Invalid admin secret"


class NotFoundError(ArsenalError):
    status_code = 404
    error = "Customer not found"


class UpstreamError(ArsenalError):
    """The store call itself failed or returned a top-level error payload."""

    status_code = 500
    error = "Upstream store request failed"


class FieldWriteError(ArsenalError):
    """One or more attribute writes were rejected; carries every rejection in order."""

    status_code = 400
    error = "Metafield update errors"

    def __init__(self, user_errors: list[FieldError]) -> None:
        super().__init__(f"{len(user_errors)} metafield write(s) rejected")
        self.user_errors = list(user_errors)

    def to_content(self) -> dict:
        content = super().to_content()
        content["userErrors"] = [e.to_dict() for e in self.user_errors]
        return content


class DecodeError(ArsenalError):
    """Stored data is malformed and has no safe default."""

    status_code = 500
    error = "Stored data could not be decoded"

"""Records exchanged with the remote customer store, and its abstract interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from arsenal.errors import FieldError

NUMBER_INTEGER = "number_integer"
SINGLE_LINE_TEXT = "single_line_text_field"
JSON = "json"


@dataclass(frozen=True)
class RawRecord:
    """A customer snapshot as returned by the store. Read-only to this service."""

    id: str
    display_name: str | None = None
    created_at: str | None = None
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class MetafieldEntry:
    """One typed attribute write."""

    key: str
    value: str
    value_type: str = SINGLE_LINE_TEXT


@dataclass
class WriteResult:
    """Outcome of one batched write: per-entry rejections, empty when all succeeded."""

    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class RemoteStore(ABC):
    """The customer/metafield store this service reads from and writes to.

    Transport or top-level failures raise ``UpstreamError``; a missing record
    raises ``NotFoundError``.
    """

    @abstractmethod
    async def fetch_batch(self, count: int, namespace: str) -> list[RawRecord]:
        """Return up to ``count`` records in store order."""
        ...

    @abstractmethod
    async def fetch_one(self, record_id: str, namespace: str) -> RawRecord:
        ...

    @abstractmethod
    async def write_attributes(
        self,
        record_id: str,
        namespace: str,
        entries: list[MetafieldEntry],
    ) -> WriteResult:
        """Write all ``entries`` for one record in a single call."""
        ...

    async def aclose(self) -> None:
        """Release transport resources."""
        return None

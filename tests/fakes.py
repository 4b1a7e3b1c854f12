"""In-memory RemoteStore for tests."""

from __future__ import annotations

from arsenal.errors import FieldError, NotFoundError, UpstreamError
from arsenal.store.records import MetafieldEntry, RawRecord, RemoteStore, WriteResult


class FakeStore(RemoteStore):
    """Records live in a list; writes are best-effort per entry.

    ``rejected_keys`` maps a key to the message the store rejects it with;
    other entries in the same write are still applied.
    """

    def __init__(self, records: list[RawRecord] | None = None) -> None:
        self.records: list[RawRecord] = list(records or [])
        self.rejected_keys: dict[str, str] = {}
        self.failing_ids: set[str] = set()
        self.fetch_error: UpstreamError | None = None
        self.fetch_counts: list[int] = []
        self.writes: list[tuple[str, str, list[MetafieldEntry]]] = []
        self.stored: dict[str, dict[str, str]] = {}

    async def fetch_batch(self, count: int, namespace: str) -> list[RawRecord]:
        self.fetch_counts.append(count)
        if self.fetch_error is not None:
            raise self.fetch_error
        return self.records[:count]

    async def fetch_one(self, record_id: str, namespace: str) -> RawRecord:
        if self.fetch_error is not None:
            raise self.fetch_error
        for record in self.records:
            if record.id == record_id or record.id.rsplit("/", 1)[-1] == record_id:
                return record
        raise NotFoundError(f"No customer with id {record_id}")

    async def write_attributes(
        self,
        record_id: str,
        namespace: str,
        entries: list[MetafieldEntry],
    ) -> WriteResult:
        self.writes.append((record_id, namespace, list(entries)))
        if record_id in self.failing_ids:
            raise UpstreamError("GraphQL errors: [{'message': 'Throttled'}]")

        errors = []
        target = self.stored.setdefault(record_id, {})
        for index, entry in enumerate(entries):
            if entry.key in self.rejected_keys:
                errors.append(FieldError(field=["metafields", str(index), "value"], message=self.rejected_keys[entry.key]))
            else:
                target[entry.key] = entry.value
        return WriteResult(errors=errors)

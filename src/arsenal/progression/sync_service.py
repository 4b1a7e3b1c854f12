"""Metafield writes: admin updates for one pilot and bulk initialization.

``apply_updates`` reports every per-field rejection the store returns and
fails the whole call if there is any, but the store's batched write is not
assumed to be atomic: accepted fields may already be persisted.

``bulk_initialize`` only looks at top-level failures of each write. Per-field
rejections inside an otherwise successful write are not inspected there. A
failed write (UpstreamError) marks that record failed and the run moves on to
the next record instead of aborting, so one throttled customer does not hide
the outcome of the rest of the batch. Failures fetching the batch itself
still propagate.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

import structlog

from arsenal.config import Settings
from arsenal.errors import FieldWriteError, UpstreamError, ValidationError
from arsenal.progression.decoder import (
    DEFAULT_COUNTRY,
    DEFAULT_FACTION,
    PROFILE_USERNAME_FALLBACK,
)
from arsenal.progression.tiers import classify_tier
from arsenal.store.records import (
    JSON,
    NUMBER_INTEGER,
    SINGLE_LINE_TEXT,
    MetafieldEntry,
    RawRecord,
    RemoteStore,
)

logger = structlog.get_logger()

INITIALIZED_MARKER_KEY = "level"


@dataclass(frozen=True)
class SyncResult:
    record_id: str
    updates: dict[str, Any]


@dataclass(frozen=True)
class BulkUpdateResult:
    record_id: str
    name: str | None
    success: bool


def entry_for_value(key: str, value: Any) -> MetafieldEntry:
    """Tag a value with the metafield type its runtime kind maps to.

    Numbers are written as integers, everything else as single-line text.
    """
    if isinstance(value, bool):
        return MetafieldEntry(key=key, value=str(value).lower(), value_type=SINGLE_LINE_TEXT)
    if isinstance(value, (int, float)):
        return MetafieldEntry(key=key, value=str(value), value_type=NUMBER_INTEGER)
    if isinstance(value, str):
        return MetafieldEntry(key=key, value=value, value_type=SINGLE_LINE_TEXT)
    raise ValidationError(f"Unsupported value for {key!r}: expected a number or a string")


def default_entries(display_name: str | None) -> list[MetafieldEntry]:
    """The attribute set a never-initialized pilot starts with."""
    return [
        MetafieldEntry("level", "1", NUMBER_INTEGER),
        MetafieldEntry("xp", "0", NUMBER_INTEGER),
        MetafieldEntry("victories", "0", NUMBER_INTEGER),
        MetafieldEntry("tier", classify_tier(1).name, SINGLE_LINE_TEXT),
        MetafieldEntry("country", DEFAULT_COUNTRY, SINGLE_LINE_TEXT),
        MetafieldEntry("faction", DEFAULT_FACTION, SINGLE_LINE_TEXT),
        MetafieldEntry("username", display_name or PROFILE_USERNAME_FALLBACK, SINGLE_LINE_TEXT),
        MetafieldEntry("achievements", json.dumps([]), JSON),
    ]


class MetafieldSyncService:
    def __init__(self, store: RemoteStore, settings: Settings) -> None:
        self.store = store
        self.settings = settings

    async def apply_updates(self, record_id: str | None, updates: Any) -> SyncResult:
        """Write every key in ``updates`` to one customer in a single batched call.

        ``updates`` arrives straight from the request body, so anything that is
        not a non-empty mapping is rejected before the store is called.
        """
        if not record_id or not updates:
            raise ValidationError(
                "customer_id and updates are required",
                error="customer_id and updates are required",
            )
        if not isinstance(updates, Mapping):
            raise ValidationError("updates must be an object of key/value pairs", error="Invalid updates")

        entries = [entry_for_value(key, value) for key, value in updates.items()]
        result = await self.store.write_attributes(record_id, self.settings.metafield_namespace, entries)

        if result.errors:
            logger.warning(
                "metafield_update_rejected",
                customer_id=record_id,
                attempted=len(entries),
                rejected=len(result.errors),
            )
            raise FieldWriteError(result.errors)

        logger.info("metafield_update_applied", customer_id=record_id, keys=sorted(updates))
        return SyncResult(record_id=record_id, updates=dict(updates))

    async def initialize_records(self, records: Iterable[RawRecord]) -> list[BulkUpdateResult]:
        """Write defaults to every record that has no ``level`` attribute yet.

        Records are written one at a time in the given order. Already
        initialized records are skipped and do not appear in the result.
        """
        results: list[BulkUpdateResult] = []
        skipped = 0
        for record in records:
            if INITIALIZED_MARKER_KEY in record.attributes:
                skipped += 1
                continue

            try:
                await self.store.write_attributes(
                    record.id,
                    self.settings.metafield_namespace,
                    default_entries(record.display_name),
                )
                success = True
            except UpstreamError as exc:
                logger.warning("bulk_initialize_record_failed", customer_id=record.id, error=exc.message)
                success = False

            results.append(BulkUpdateResult(record_id=record.id, name=record.display_name, success=success))

        logger.info(
            "bulk_initialize_complete",
            processed=len(results),
            skipped=skipped,
            failed=sum(1 for r in results if not r.success),
        )
        return results

    async def bulk_initialize(self) -> list[BulkUpdateResult]:
        """Fetch one batch of customers and initialize the new ones."""
        records = await self.store.fetch_batch(
            self.settings.bulk_batch_size,
            self.settings.metafield_namespace,
        )
        return await self.initialize_records(records)

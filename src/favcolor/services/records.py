"""Persistence for color records."""
from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Final

from favcolor.core.errors import MissingFieldsError
from favcolor.db.store import Key, KeyValueStore
from favcolor.db.time import isoformat_z, utcnow
from favcolor.schemas.color import ColorRecord, ColorRecordDraft

__all__ = ["RecordStore", "COLOR_PREFIX", "COUNTER_KEY"]

logger = logging.getLogger(__name__)

COLOR_PREFIX: Final[str] = "colors"
COUNTER_KEY: Final[Key] = ("counter", "colors")


class RecordStore:
    """Create and list immutable color records.

    IDs come from the store's atomic increment on `COUNTER_KEY`, so concurrent
    writers (including other service instances sharing the backend) never
    receive the same ID. Records are never updated or deleted.
    """

    def __init__(self, store: KeyValueStore, clock: Callable[[], datetime] = utcnow) -> None:
        self._store = store
        self._clock = clock

    async def next_id(self) -> int:
        """Mint the next record ID."""
        return await self._store.increment(COUNTER_KEY)

    async def create(self, draft: ColorRecordDraft, author: str) -> ColorRecord:
        """Persist a new record authored by `author`.

        Args:
            draft: Client-supplied color and comment.
            author: Verified username of the caller.

        Returns:
            The stored record with server-assigned id, author and createdAt.

        Raises:
            MissingFieldsError: If the draft has no color.
        """
        if not draft.color:
            raise MissingFieldsError("color is required")

        record = ColorRecord(
            id=await self.next_id(),
            author=author,
            color=draft.color,
            comment=draft.comment or "",
            created_at=isoformat_z(self._clock()),
        )
        await self._store.set((COLOR_PREFIX, record.id), record.model_dump(by_alias=True))
        logger.info("User %s posted color record %d", author, record.id)
        return record

    async def get(self, record_id: int) -> ColorRecord | None:
        """Return the record with `record_id`, or None."""
        if record_id < 1:
            return None
        document = await self._store.get((COLOR_PREFIX, record_id))
        return None if document is None else ColorRecord.model_validate(document)

    async def exists(self, record_id: int) -> bool:
        return await self.get(record_id) is not None

    async def list_all(self) -> list[ColorRecord]:
        """Return every record, newest first."""
        documents = await self._store.list((COLOR_PREFIX,))
        records = [ColorRecord.model_validate(document) for document in documents]
        records.sort(key=lambda record: record.id, reverse=True)
        return records

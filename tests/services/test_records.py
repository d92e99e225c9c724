# tests/services/test_records.py
"""Tests for color record persistence."""

import asyncio
import re
from datetime import UTC, datetime

import pytest

from favcolor.core.errors import MissingFieldsError
from favcolor.schemas.color import ColorRecordDraft
from favcolor.services.records import RecordStore

ISO_Z = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


class TestRecordStore:
    """Test record creation and listing."""

    @pytest.mark.asyncio
    async def test_create_stamps_server_fields(self, record_store):
        """Test that id, author and createdAt come from the server."""
        draft = ColorRecordDraft.model_validate(
            {"color": "#ff0000", "comment": "warm", "author": "mallory", "id": 99}
        )
        record = await record_store.create(draft, author="alice")

        assert record.id == 1
        assert record.author == "alice"
        assert record.color == "#ff0000"
        assert record.comment == "warm"
        assert ISO_Z.match(record.created_at)

    @pytest.mark.asyncio
    async def test_created_at_uses_clock(self, store):
        """Test that the timestamp is rendered in UTC with milliseconds."""
        moment = datetime(2024, 5, 1, 12, 30, 45, 123456, tzinfo=UTC)
        record_store = RecordStore(store, clock=lambda: moment)

        record = await record_store.create(ColorRecordDraft(color="blue"), author="alice")
        assert record.created_at == "2024-05-01T12:30:45.123Z"

    @pytest.mark.asyncio
    async def test_comment_defaults_to_empty(self, record_store):
        """Test that a draft without a comment stores an empty string."""
        record = await record_store.create(ColorRecordDraft(color="blue"), author="alice")
        assert record.comment == ""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("color", [None, ""])
    async def test_color_required(self, record_store, color):
        """Test that a draft without a color is rejected and nothing is stored."""
        with pytest.raises(MissingFieldsError):
            await record_store.create(ColorRecordDraft(color=color), author="alice")
        assert await record_store.list_all() == []

    @pytest.mark.asyncio
    async def test_ids_are_sequential(self, record_store):
        """Test that IDs count up from one."""
        ids = [
            (await record_store.create(ColorRecordDraft(color=c), author="alice")).id
            for c in ("red", "green", "blue")
        ]
        assert ids == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_concurrent_creates_get_distinct_ids(self, record_store):
        """Test that records created at the same moment never share an ID."""
        records = await asyncio.gather(
            *(record_store.create(ColorRecordDraft(color=f"#{n:06x}"), author="alice") for n in range(25))
        )

        assert len({record.id for record in records}) == 25
        assert len(await record_store.list_all()) == 25

    @pytest.mark.asyncio
    async def test_list_all_newest_first(self, record_store):
        """Test that listing orders by ID, newest first, beyond single digits."""
        for n in range(12):
            await record_store.create(ColorRecordDraft(color=str(n)), author="alice")

        ids = [record.id for record in await record_store.list_all()]
        assert ids == list(range(12, 0, -1))

    @pytest.mark.asyncio
    async def test_get(self, record_store):
        """Test lookups by ID, including out-of-range IDs."""
        record = await record_store.create(ColorRecordDraft(color="red"), author="alice")

        assert await record_store.get(record.id) == record
        assert await record_store.get(0) is None
        assert await record_store.get(-5) is None
        assert await record_store.exists(record.id + 1) is False

# tests/services/test_aggregation.py
"""Tests for the per-viewer color feed."""

import pytest

from favcolor.schemas.color import ColorRecordDraft


async def _post(record_store, author, color):
    return await record_store.create(ColorRecordDraft(color=color), author=author)


class TestColorFeed:
    """Test composition of records and favorites."""

    @pytest.mark.asyncio
    async def test_flags_are_per_viewer(self, color_feed, record_store):
        """Test that isFavorite reflects only the viewing user's favorites."""
        red = await _post(record_store, "alice", "red")
        blue = await _post(record_store, "bob", "blue")
        await color_feed.toggle_favorite("alice", red.id)

        alice_view = await color_feed.list_with_favorites("alice")
        bob_view = await color_feed.list_with_favorites("bob")

        assert [(view.id, view.is_favorite) for view in alice_view] == [(blue.id, False), (red.id, True)]
        assert all(not view.is_favorite for view in bob_view)

    @pytest.mark.asyncio
    async def test_flags_are_not_persisted(self, color_feed, record_store):
        """Test that stored records never carry a favorite flag."""
        red = await _post(record_store, "alice", "red")
        await color_feed.toggle_favorite("alice", red.id)

        stored = await record_store.get(red.id)
        assert "is_favorite" not in stored.model_dump()

    @pytest.mark.asyncio
    async def test_my_page(self, color_feed, record_store):
        """Test that my page splits own posts and favorites, newest first."""
        first = await _post(record_store, "alice", "red")
        second = await _post(record_store, "bob", "blue")
        third = await _post(record_store, "alice", "green")
        await color_feed.toggle_favorite("alice", second.id)
        await color_feed.toggle_favorite("alice", third.id)

        page = await color_feed.my_page("alice")

        assert [record.id for record in page.my_posts] == [third.id, first.id]
        assert [record.id for record in page.my_favorites] == [third.id, second.id]

    @pytest.mark.asyncio
    async def test_my_page_empty(self, color_feed):
        """Test that a new user sees two empty lists."""
        page = await color_feed.my_page("nobody")
        assert page.my_posts == []
        assert page.my_favorites == []

    @pytest.mark.asyncio
    async def test_toggle_unknown_record_is_noop(self, color_feed, favorites_index):
        """Test that favoriting a missing record reports False and stores nothing."""
        assert await color_feed.toggle_favorite("alice", 42) is False
        assert await favorites_index.favorite_ids("alice") == set()

# tests/services/test_favorites_index.py
"""Tests for the per-user favorites index."""

import pytest


class TestFavoritesIndex:
    """Test toggling and reading favorites."""

    @pytest.mark.asyncio
    async def test_toggle_flips_state(self, favorites_index):
        """Test that toggling alternates between favorite and not."""
        assert await favorites_index.toggle("alice", 1) is True
        assert await favorites_index.is_favorite("alice", 1) is True

        assert await favorites_index.toggle("alice", 1) is False
        assert await favorites_index.is_favorite("alice", 1) is False

        assert await favorites_index.toggle("alice", 1) is True

    @pytest.mark.asyncio
    async def test_users_are_independent(self, favorites_index):
        """Test that one user's favorites never affect another's."""
        await favorites_index.toggle("alice", 1)
        await favorites_index.toggle("bob", 2)

        assert await favorites_index.favorite_ids("alice") == {1}
        assert await favorites_index.favorite_ids("bob") == {2}
        assert await favorites_index.is_favorite("bob", 1) is False

    @pytest.mark.asyncio
    async def test_prefix_usernames_do_not_collide(self, favorites_index):
        """Test that a username that prefixes another keeps a separate partition."""
        await favorites_index.toggle("al", 1)
        await favorites_index.toggle("alice", 2)

        assert await favorites_index.favorite_ids("al") == {1}
        assert await favorites_index.favorite_ids("alice") == {2}

    @pytest.mark.asyncio
    async def test_empty(self, favorites_index):
        """Test that a user with no favorites gets an empty set."""
        assert await favorites_index.favorite_ids("nobody") == set()

"""Per-user favorites index."""
from __future__ import annotations

from typing import Final

from favcolor.db.store import Key, KeyValueStore

__all__ = ["FavoritesIndex", "FAVORITE_PREFIX"]

FAVORITE_PREFIX: Final[str] = "favorites"


def _favorite_key(username: str, record_id: int) -> Key:
    return (FAVORITE_PREFIX, username, record_id)


class FavoritesIndex:
    """Set of favorited record IDs, partitioned by username.

    Entries are keyed `("favorites", username, record_id)`, so every lookup
    scans only the caller's own partition. The index does not check that a
    record exists; that is the caller's concern.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    async def toggle(self, username: str, record_id: int) -> bool:
        """Flip the favorite state and return the state this call produced."""
        key = _favorite_key(username, record_id)
        if await self._store.delete(key):
            return False
        await self._store.set(key, {"recordId": record_id})
        return True

    async def is_favorite(self, username: str, record_id: int) -> bool:
        return await self._store.get(_favorite_key(username, record_id)) is not None

    async def favorite_ids(self, username: str) -> set[int]:
        """Return all record IDs `username` has favorited."""
        documents = await self._store.list((FAVORITE_PREFIX, username))
        return {int(document["recordId"]) for document in documents}

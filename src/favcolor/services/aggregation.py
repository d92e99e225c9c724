"""Read models combining records with a viewer's favorites."""
from __future__ import annotations

import logging

from favcolor.schemas.color import ColorRecord, ColorRecordView, MyPage
from favcolor.services.favorites import FavoritesIndex
from favcolor.services.records import RecordStore

__all__ = ["ColorFeed"]

logger = logging.getLogger(__name__)


def _decorate(record: ColorRecord, is_favorite: bool) -> ColorRecordView:
    return ColorRecordView(**record.model_dump(), is_favorite=is_favorite)


class ColorFeed:
    """Compose the record store and favorites index into per-user views.

    Favorite flags are computed at read time and never written back to the
    stored records.
    """

    def __init__(self, records: RecordStore, favorites: FavoritesIndex) -> None:
        self._records = records
        self._favorites = favorites

    async def list_with_favorites(self, username: str) -> list[ColorRecordView]:
        """Return all records, newest first, flagged for `username`."""
        records = await self._records.list_all()
        favorite_ids = await self._favorites.favorite_ids(username)
        return [_decorate(record, record.id in favorite_ids) for record in records]

    async def my_page(self, username: str) -> MyPage:
        """Return the records `username` posted and the ones they favorited."""
        records = await self._records.list_all()
        favorite_ids = await self._favorites.favorite_ids(username)
        return MyPage(
            my_posts=[record for record in records if record.author == username],
            my_favorites=[record for record in records if record.id in favorite_ids],
        )

    async def toggle_favorite(self, username: str, record_id: int) -> bool:
        """Toggle a favorite; unknown records are a silent no-op reporting False."""
        if not await self._records.exists(record_id):
            logger.debug("Ignoring favorite toggle for unknown record %s", record_id)
            return False
        return await self._favorites.toggle(username, record_id)

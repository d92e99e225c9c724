# src/favcolor/api/endpoints/favorites.py
"""Favorite toggle endpoint."""

from fastapi import APIRouter

from favcolor.api.dependencies import ColorFeedDep, CurrentUsernameDep, require_session
from favcolor.schemas.color import FavoriteToggleResponse

router = APIRouter(prefix="/favorites", tags=["favorites"], dependencies=require_session)


@router.post("/{record_id}", response_model=FavoriteToggleResponse)
async def toggle_favorite(
    record_id: int,
    username: CurrentUsernameDep,
    feed: ColorFeedDep,
) -> FavoriteToggleResponse:
    """Flip the caller's favorite flag on a record and return the new state.

    Unknown record ids are accepted and leave nothing behind.
    """
    favorite = await feed.toggle_favorite(username, record_id)
    return FavoriteToggleResponse(favorite=favorite)

# src/favcolor/api/endpoints/users.py
"""Per-user views and the optional user directory."""

from __future__ import annotations

from fastapi import APIRouter

from favcolor.api.dependencies import (
    ColorFeedDep,
    CredentialStoreDep,
    CurrentUsernameDep,
    require_session,
)
from favcolor.schemas.color import MyPage

router = APIRouter(tags=["users"], dependencies=require_session)

# Mounted only when USER_DIRECTORY_ENABLED is set; still requires a session.
directory_router = APIRouter(prefix="/users", tags=["users"], dependencies=require_session)


@router.get("/me", summary="The caller's posts and favorites", response_model=MyPage)
async def my_page(username: CurrentUsernameDep, feed: ColorFeedDep) -> MyPage:
    return await feed.my_page(username)


@directory_router.get("", summary="List registered usernames", response_model=list[str])
async def list_users(credentials: CredentialStoreDep) -> list[str]:
    """Return every registered username."""
    return await credentials.list_usernames()

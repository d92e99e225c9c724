# src/favcolor/api/endpoints/fallback.py
"""Catch-all for unmatched API paths.

Included last, so it only sees requests no other API route accepted
(unknown paths and wrong methods alike). Anonymous callers get the gate's 401
before learning whether a route exists.
"""

from fastapi import APIRouter, HTTPException, status

from favcolor.api.dependencies import require_session

router = APIRouter(include_in_schema=False, dependencies=require_session)

_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


@router.api_route("/{path:path}", methods=_METHODS)
async def unmatched(path: str) -> None:
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")

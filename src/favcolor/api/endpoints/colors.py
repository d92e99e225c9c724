# src/favcolor/api/endpoints/colors.py
"""Color record endpoints."""

from typing import Annotated

from fastapi import APIRouter, Form, HTTPException, status
from pydantic import ValidationError

from favcolor.api.dependencies import (
    ColorFeedDep,
    CurrentUsernameDep,
    RecordStoreDep,
    require_session,
)
from favcolor.core.errors import MissingFieldsError
from favcolor.schemas.color import ColorRecordDraft, ColorRecordView, CreateColorResponse

router = APIRouter(prefix="/colors", tags=["colors"], dependencies=require_session)


@router.post(
    "",
    summary="Post a favorite color",
    status_code=status.HTTP_201_CREATED,
    response_model=CreateColorResponse,
)
async def create_color(
    username: CurrentUsernameDep,
    records: RecordStoreDep,
    record: Annotated[str | None, Form(description="JSON object: {color, comment}")] = None,
) -> CreateColorResponse:
    """Store a record for the caller.

    The multipart field `record` carries a JSON object. Author, id and
    createdAt are always assigned by the server.
    """
    if not record:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="The 'record' form field is required",
        )
    try:
        draft = ColorRecordDraft.model_validate_json(record)
        stored = await records.create(draft, author=username)
    except (ValidationError, MissingFieldsError) as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="The record must be a JSON object with a non-empty 'color'",
        ) from err

    return CreateColorResponse(record=stored)


@router.get("", summary="List color records, newest first", response_model=list[ColorRecordView])
async def list_colors(username: CurrentUsernameDep, feed: ColorFeedDep) -> list[ColorRecordView]:
    """Return every record with `isFavorite` computed for the caller."""
    return await feed.list_with_favorites(username)

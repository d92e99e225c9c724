"""Color record Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class ColorRecordDraft(BaseModel):
    """Client-submitted part of a color record.

    Any author, id or timestamp fields in the submission are ignored; the
    server stamps those itself.
    """

    color: str | None = Field(None, description="Color value, e.g. '#ff0000'")
    comment: str = Field("", description="Free-form comment")


class ColorRecord(BaseModel):
    """A stored color record as persisted and returned by the API."""

    id: int
    author: str
    color: str
    comment: str = ""
    created_at: str = Field(..., alias="createdAt", description="ISO-8601 UTC timestamp")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ColorRecordView(ColorRecord):
    """A color record decorated with the viewer's favorite flag."""

    is_favorite: bool = Field(..., alias="isFavorite")


class CreateColorResponse(BaseModel):
    """Response body for a newly created record."""

    record: ColorRecord


class FavoriteToggleResponse(BaseModel):
    """State produced by a favorite toggle."""

    favorite: bool


class MyPage(BaseModel):
    """The caller's own posts and favorites, newest first."""

    my_posts: list[ColorRecord] = Field(default_factory=list, alias="myPosts")
    my_favorites: list[ColorRecord] = Field(default_factory=list, alias="myFavorites")

    model_config = ConfigDict(populate_by_name=True)

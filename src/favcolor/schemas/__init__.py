# src/favcolor/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .auth import CredentialsRequest, LoginResponse, MessageResponse, SessionInfo
from .color import (
    ColorRecord,
    ColorRecordDraft,
    ColorRecordView,
    CreateColorResponse,
    FavoriteToggleResponse,
    MyPage,
)

__all__ = [
    "CredentialsRequest", "LoginResponse", "MessageResponse", "SessionInfo",
    "ColorRecord", "ColorRecordDraft", "ColorRecordView",
    "CreateColorResponse", "FavoriteToggleResponse", "MyPage",
]

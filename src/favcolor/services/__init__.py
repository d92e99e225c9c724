# src/favcolor/services/__init__.py
"""Business logic services for the favcolor application."""

from .aggregation import ColorFeed
from .container import Services, build_services
from .credentials import CredentialStore, User
from .favorites import FavoritesIndex
from .records import RecordStore
from .tokens import SessionTokenService, TokenPayload

__all__ = [
    "ColorFeed",
    "CredentialStore",
    "FavoritesIndex",
    "RecordStore",
    "Services",
    "SessionTokenService",
    "TokenPayload",
    "User",
    "build_services",
]

# src/favcolor/api/endpoints/__init__.py
"""API endpoint modules."""

from .auth import router as auth_router
from .auth import session_router
from .colors import router as colors_router
from .fallback import router as fallback_router
from .favorites import router as favorites_router
from .site import mount_static_site
from .users import directory_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "session_router",
    "colors_router",
    "favorites_router",
    "users_router",
    "directory_router",
    "fallback_router",
    "mount_static_site",
]

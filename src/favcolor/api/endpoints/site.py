# src/favcolor/api/endpoints/site.py
"""Optional static front-end."""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, FastAPI, HTTPException, Request, status
from fastapi.responses import FileResponse, RedirectResponse, Response
from fastapi.staticfiles import StaticFiles

from favcolor.api.dependencies import TokenServiceDep
from favcolor.core.errors import AuthenticationError
from favcolor.services.tokens import SessionTokenService

router = APIRouter(include_in_schema=False)

LANDING_PAGE = "/index.html"


def _has_valid_session(request: Request, tokens: SessionTokenService) -> bool:
    token = request.cookies.get(tokens.cookie_name)
    if not token:
        return False
    try:
        tokens.validate(token)
    except AuthenticationError:
        return False
    return True


@router.get("/signup.html")
@router.get("/login.html")
async def auth_page(request: Request, tokens: TokenServiceDep) -> Response:
    """Serve the signup/login page, or send signed-in visitors to the landing page."""
    if _has_valid_session(request, tokens):
        return RedirectResponse(LANDING_PAGE, status_code=status.HTTP_302_FOUND)

    page = Path(request.app.state.settings.static_dir) / request.url.path.lstrip("/")
    if not page.is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    return FileResponse(page)


def mount_static_site(app: FastAPI, static_dir: str) -> None:
    """Serve `static_dir` at `/`; must run after every API route is registered."""
    app.include_router(router)
    app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")

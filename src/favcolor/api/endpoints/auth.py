# src/favcolor/api/endpoints/auth.py
"""Authentication endpoints: signup, login, logout and session check."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Response, status

from favcolor.api.dependencies import (
    CredentialStoreDep,
    CurrentUsernameDep,
    TokenServiceDep,
    require_session,
)
from favcolor.core.errors import (
    InvalidCredentialsError,
    MissingFieldsError,
    PasswordTooLongError,
    UsernameTakenError,
)
from favcolor.schemas.auth import CredentialsRequest, LoginResponse, MessageResponse, SessionInfo

logger = logging.getLogger(__name__)

# Public: reachable without a session
router = APIRouter(tags=["authentication"])
# Protected: every route passes the session gate
session_router = APIRouter(tags=["authentication"], dependencies=require_session)

_MISSING_CREDENTIALS = "Username and password are required"


@router.post(
    "/signup",
    summary="Register a new account",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
)
async def signup(payload: CredentialsRequest, credentials: CredentialStoreDep) -> MessageResponse:
    """Create an account; the password is stored only as a bcrypt hash."""
    try:
        await credentials.register(payload.username, payload.password)
    except MissingFieldsError as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=_MISSING_CREDENTIALS,
        ) from err
    except PasswordTooLongError as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(err),
        ) from err
    except UsernameTakenError as err:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="This username is already taken",
        ) from err

    return MessageResponse(message="User registered successfully")


@router.post(
    "/login",
    summary="Authenticate and receive a session cookie",
    status_code=status.HTTP_200_OK,
    response_model=LoginResponse,
)
async def login(
    payload: CredentialsRequest,
    response: Response,
    credentials: CredentialStoreDep,
    tokens: TokenServiceDep,
) -> LoginResponse:
    """Verify credentials and set the HTTP-only session cookie."""
    if not payload.username or not payload.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=_MISSING_CREDENTIALS,
        )

    try:
        user = await credentials.verify(payload.username, payload.password)
    except InvalidCredentialsError as err:
        logger.info("Failed login attempt for %s", payload.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        ) from err

    tokens.bind_cookie(response, tokens.issue(user.username))
    logger.info("User %s logged in", user.username)
    return LoginResponse(message="Login successful", username=user.username)


@session_router.post(
    "/logout",
    summary="End the session",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def logout(tokens: TokenServiceDep) -> Response:
    """Clear the session cookie. Tokens are stateless, so nothing is revoked server-side."""
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    tokens.clear_cookie(response)
    return response


@session_router.get("/check", summary="Return the session's username", response_model=SessionInfo)
async def check(username: CurrentUsernameDep) -> SessionInfo:
    return SessionInfo(username=username)

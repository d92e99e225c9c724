"""Shared API dependencies for authentication and service lookup."""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from favcolor.core.errors import AuthenticationError
from favcolor.services import (
    ColorFeed,
    CredentialStore,
    RecordStore,
    Services,
    SessionTokenService,
)

logger = logging.getLogger(__name__)

CREDENTIALS_DETAIL = "Could not validate credentials"


def get_services(request: Request) -> Services:
    """Return the service graph attached to the running application."""
    services: Services = request.app.state.services
    return services


ServicesDep = Annotated[Services, Depends(get_services)]


def get_credential_store(services: ServicesDep) -> CredentialStore:
    return services.credentials


def get_token_service(services: ServicesDep) -> SessionTokenService:
    return services.tokens


def get_record_store(services: ServicesDep) -> RecordStore:
    return services.records


def get_color_feed(services: ServicesDep) -> ColorFeed:
    return services.feed


CredentialStoreDep = Annotated[CredentialStore, Depends(get_credential_store)]
TokenServiceDep = Annotated[SessionTokenService, Depends(get_token_service)]
RecordStoreDep = Annotated[RecordStore, Depends(get_record_store)]
ColorFeedDep = Annotated[ColorFeed, Depends(get_color_feed)]


def get_current_username(request: Request, tokens: TokenServiceDep) -> str:
    """Gate a request on its session cookie.

    Attached as a router-level dependency to every protected router, and also
    requested by handlers that need the caller's identity. The verified
    username is stored on `request.state.username`; it is the only identity
    handlers may use.

    Raises:
        HTTPException: 401 with a uniform message when the cookie is absent,
            expired or invalid.
    """
    token = request.cookies.get(tokens.cookie_name)
    if not token:
        logger.debug("Rejected %s %s: no session cookie", request.method, request.url.path)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=CREDENTIALS_DETAIL,
        )
    try:
        payload = tokens.validate(token)
    except AuthenticationError as err:
        logger.debug("Rejected %s %s: %s", request.method, request.url.path, err)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=CREDENTIALS_DETAIL,
        ) from err

    request.state.username = payload.subject
    return payload.subject


# Type alias for the verified caller identity
CurrentUsernameDep = Annotated[str, Depends(get_current_username)]

# Router-level guard for protected routers
require_session = [Depends(get_current_username)]

"""Stateless session tokens.

Tokens are HS256 JWTs carrying the username (`sub`), issue time (`iat`) and
absolute expiry (`exp`), all in integer epoch seconds. Nothing is stored on
the server: a token is valid exactly when its signature matches the process
secret and the current time is before `exp`.

The cookie's `Max-Age` is taken from each token's own `exp`, so browser-side
and server-side expiry stay in step even for tokens issued with a custom TTL.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeGuard

from fastapi import Response
from jose import JWTError, jwt

from favcolor.core.errors import ConfigurationError, TokenExpiredError, TokenInvalidError
from favcolor.core.settings import Settings

Clock = Callable[[], float]


def _is_epoch(value: object) -> TypeGuard[int]:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class TokenPayload:
    """Verified claims extracted from a session token."""

    subject: str
    issued_at: int
    expires_at: int


class SessionTokenService:
    """Issue, validate and transport session tokens."""

    def __init__(
        self,
        secret: str,
        *,
        ttl_seconds: int,
        algorithm: str = "HS256",
        cookie_name: str = "auth_token",
        cookie_secure: bool = False,
        clock: Clock = time.time,
    ) -> None:
        if not secret:
            raise ConfigurationError("Session secret must not be empty")
        self._secret = secret
        self.ttl_seconds = ttl_seconds
        self.algorithm = algorithm
        self.cookie_name = cookie_name
        self.cookie_secure = cookie_secure
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings, clock: Clock = time.time) -> SessionTokenService:
        """Build the service from settings, enforcing the secret policy."""
        return cls(
            settings.resolve_secret(),
            ttl_seconds=settings.session_ttl_seconds,
            algorithm=settings.jwt_algorithm,
            cookie_name=settings.session_cookie_name,
            cookie_secure=settings.session_cookie_secure,
            clock=clock,
        )

    def issue(self, subject: str, ttl_seconds: int | None = None) -> str:
        """Return a signed token for `subject` expiring `ttl_seconds` from now."""
        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        issued_at = int(self._clock())
        claims = {"sub": subject, "iat": issued_at, "exp": issued_at + ttl}
        encoded: str = jwt.encode(claims, self._secret, algorithm=self.algorithm)
        return encoded

    def validate(self, token: str | None) -> TokenPayload:
        """Verify `token` and return its claims.

        Raises:
            TokenInvalidError: Bad signature, unexpected algorithm, malformed
                token, or a missing `sub`, `iat` or `exp` claim.
            TokenExpiredError: The current time is at or past `exp`.
        """
        if not token:
            raise TokenInvalidError("Token is empty")
        try:
            # Expiry is checked below so that the boundary is `now >= exp`.
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTError as err:
            raise TokenInvalidError("Token signature or format is invalid") from err

        subject = claims.get("sub")
        issued_at = claims.get("iat")
        expires_at = claims.get("exp")
        if not isinstance(subject, str) or not subject:
            raise TokenInvalidError("Token has no subject")
        if not _is_epoch(issued_at):
            raise TokenInvalidError("Token has no usable issue time")
        if not _is_epoch(expires_at):
            raise TokenInvalidError("Token has no usable expiry")
        if self._clock() >= expires_at:
            raise TokenExpiredError("Token has expired")

        return TokenPayload(subject=subject, issued_at=issued_at, expires_at=expires_at)

    def bind_cookie(self, response: Response, token: str) -> None:
        """Attach `token` to `response` as the session cookie.

        The cookie's Max-Age is the token's own lifetime (`exp - iat`), so a
        token issued with a custom TTL gets a matching cookie.

        Raises:
            TokenInvalidError: If `token` was not issued by this service.
            TokenExpiredError: If `token` has already expired.
        """
        payload = self.validate(token)
        response.set_cookie(
            key=self.cookie_name,
            value=token,
            max_age=payload.expires_at - payload.issued_at,
            path="/",
            httponly=True,
            secure=self.cookie_secure,
            samesite="strict",
        )

    def clear_cookie(self, response: Response) -> None:
        """Expire the session cookie on the client."""
        response.delete_cookie(
            key=self.cookie_name,
            path="/",
            httponly=True,
            secure=self.cookie_secure,
            samesite="strict",
        )

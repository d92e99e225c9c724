"""Authentication-related Pydantic schemas."""

from pydantic import BaseModel, Field


class CredentialsRequest(BaseModel):
    """Username/password pair submitted to signup and login.

    Both fields are optional at the schema level so that missing values reach
    the handler and are reported as 400 rather than a schema error.
    """

    username: str | None = Field(None, description="Account name")
    password: str | None = Field(None, description="Plaintext password (never stored)")


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class LoginResponse(BaseModel):
    """Response returned after a successful login; the token travels in a cookie."""

    message: str
    username: str


class SessionInfo(BaseModel):
    """Identity carried by the caller's session."""

    username: str

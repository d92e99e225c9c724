"""Application settings and configuration.

This module defines all configuration options for the favcolor service.
Settings are loaded from environment variables (or a `.env` file) with
defaults suitable for local development. The session secret is the one value
without a usable default; see `Settings.resolve_secret`.
"""

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from favcolor.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Only ever used when ALLOW_INSECURE_DEV_SECRET is explicitly enabled.
INSECURE_DEV_SECRET = "favcolor-insecure-development-secret-do-not-deploy"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application metadata
    app_name: str = Field(default="Favorite Color Board", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Session tokens
    session_secret: str | None = Field(default=None, alias="SESSION_SECRET")
    allow_insecure_dev_secret: bool = Field(default=False, alias="ALLOW_INSECURE_DEV_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    session_ttl_seconds: int = Field(default=60 * 60 * 24, gt=0, alias="SESSION_TTL_SECONDS")
    session_cookie_name: str = Field(default="auth_token", alias="SESSION_COOKIE_NAME")
    session_cookie_secure: bool = Field(default=False, alias="SESSION_COOKIE_SECURE")

    # Password hashing cost (bcrypt log2 rounds)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31, alias="BCRYPT_ROUNDS")

    # Key-value store: "memory://" or a redis:// / rediss:// URL
    store_url: str = Field(default="memory://", alias="STORE_URL")
    store_namespace: str = Field(default="favcolor", alias="STORE_NAMESPACE")

    # Debug listing of usernames; closed unless explicitly enabled
    user_directory_enabled: bool = Field(default=False, alias="USER_DIRECTORY_ENABLED")

    # Optional static front-end
    static_dir: str | None = Field(default=None, alias="STATIC_DIR")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(default=[], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        populate_by_name=True,
        extra="ignore",
    )

    @property
    def uses_redis(self) -> bool:
        """Return True when the store URL selects the Redis backend."""
        return self.store_url.startswith(("redis://", "rediss://", "unix://"))

    def resolve_secret(self) -> str:
        """Return the token signing secret or refuse to continue.

        Returns:
            The configured secret, or the development secret when explicitly allowed.

        Raises:
            ConfigurationError: If no secret is configured and the development
                fallback has not been enabled.
        """
        secret = (self.session_secret or "").strip()
        if secret:
            return secret
        if self.allow_insecure_dev_secret:
            logger.warning(
                "SESSION_SECRET is not set; signing sessions with the INSECURE development "
                "secret. Never run this configuration in production."
            )
            return INSECURE_DEV_SECRET
        raise ConfigurationError(
            "SESSION_SECRET is required (set ALLOW_INSECURE_DEV_SECRET=true for local development)"
        )

"""
Session configuration for neo-session.
Loads signing secrets, token lifetimes and cookie policy using Pydantic settings.
"""
import logging
from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class Environment(str, Enum):
    """Deployment environments recognised by the cookie policy."""
    PRODUCTION = "production"
    DEVELOPMENT = "development"


class SessionSettings(BaseSettings):
    """
    Configuration consumed when constructing the session service.

    Values are read from ``NEO_SESSION_*`` environment variables or a ``.env``
    file and may also be passed directly as keyword arguments.
    """

    model_config = SettingsConfigDict(
        env_prefix="NEO_SESSION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    environment: Environment = Field(default=Environment.DEVELOPMENT)

    # Signing secrets
    access_token_secret: SecretStr
    refresh_token_secret: SecretStr

    # Token lifetimes
    access_token_ttl_seconds: int = Field(default=15 * 60)
    refresh_token_ttl_seconds: int = Field(default=3 * 24 * 60 * 60)

    # Cookie transport
    cookie_domain: Optional[str] = Field(default=None)
    cookie_path: str = Field(default="/")
    access_token_cookie: str = Field(default="access_token")
    refresh_token_cookie: str = Field(default="refresh_token")
    cross_site_cookies: bool = Field(default=True)

    # Password hashing (scrypt cost as log2 of N)
    password_hash_cost: int = Field(default=14)

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == Environment.PRODUCTION

    def ensure_valid(self) -> None:
        """Validate settings that the session service cannot run without.

        Raises:
            ConfigurationError: if any constraint is violated
        """
        if self.is_production and not (self.cookie_domain or "").strip():
            raise ConfigurationError(
                "cookie_domain is required when environment is 'production'",
                details={"field": "cookie_domain"},
            )

        access_secret = self.access_token_secret.get_secret_value()
        refresh_secret = self.refresh_token_secret.get_secret_value()
        if not access_secret or not refresh_secret:
            raise ConfigurationError(
                "Access and refresh token secrets must not be empty",
                details={"field": "token_secrets"},
            )
        if access_secret == refresh_secret:
            raise ConfigurationError(
                "Access and refresh token secrets must differ",
                details={"field": "token_secrets"},
            )

        if self.access_token_ttl_seconds <= 0 or self.refresh_token_ttl_seconds <= 0:
            raise ConfigurationError(
                "Token lifetimes must be positive",
                details={"field": "token_ttl"},
            )
        if self.access_token_ttl_seconds >= self.refresh_token_ttl_seconds:
            raise ConfigurationError(
                "Access token lifetime must be shorter than refresh token lifetime",
                details={
                    "access_token_ttl_seconds": self.access_token_ttl_seconds,
                    "refresh_token_ttl_seconds": self.refresh_token_ttl_seconds,
                },
            )

        if self.access_token_cookie == self.refresh_token_cookie:
            raise ConfigurationError(
                "Access and refresh cookies must use different names",
                details={"field": "cookie_names"},
            )

        if not 1 <= self.password_hash_cost <= 20:
            raise ConfigurationError(
                f"password_hash_cost must be between 1 and 20, got {self.password_hash_cost}",
                details={"field": "password_hash_cost"},
            )

        logger.debug(f"Session settings validated for {self.environment.value} environment")


@lru_cache()
def get_settings() -> SessionSettings:
    """Get cached session settings loaded from the environment."""
    return SessionSettings()

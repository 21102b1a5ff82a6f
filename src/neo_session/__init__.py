"""Neo-Session - cookie-based session credentials for FastAPI services.

This library authenticates email/password pairs against stored credentials,
issues short-lived access tokens and longer-lived refresh tokens, and moves
them between server and client in secure cookies.
"""

from .__version__ import __version__

from .config import (
    Environment,
    SessionSettings,
    get_settings,
    setup_logging,
)

from .core.exceptions import (
    # Base Exception
    NeoSessionError,

    # Input and configuration
    ValidationError,
    EmptyInputError,
    ConfigurationError,

    # Authentication
    AuthenticationError,
    InvalidCredentialsError,
    UserNotFoundError,
    DuplicateEmailError,
    MissingTokenError,
    InvalidSessionError,

    # Tokens and hashes
    TokenError,
    InvalidTokenError,
    TokenExpiredError,
    TokenMalformedError,
    MalformedHashError,
)

from .features.auth import (
    CookieService,
    MemoryUserStore,
    PasswordHasher,
    SessionService,
    TokenService,
    create_session_service,
)

__all__ = [
    "__version__",

    # Configuration
    "Environment",
    "SessionSettings",
    "get_settings",
    "setup_logging",

    # Exceptions
    "NeoSessionError",
    "ValidationError",
    "EmptyInputError",
    "ConfigurationError",
    "AuthenticationError",
    "InvalidCredentialsError",
    "UserNotFoundError",
    "DuplicateEmailError",
    "MissingTokenError",
    "InvalidSessionError",
    "TokenError",
    "InvalidTokenError",
    "TokenExpiredError",
    "TokenMalformedError",
    "MalformedHashError",

    # Services
    "CookieService",
    "MemoryUserStore",
    "PasswordHasher",
    "SessionService",
    "TokenService",
    "create_session_service",
]

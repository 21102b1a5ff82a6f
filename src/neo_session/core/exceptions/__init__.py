"""Exceptions module for neo-session.

This module provides the complete exception hierarchy for neo-session,
organized into input/configuration errors and authentication errors.
"""

from .base import (
    NeoSessionError,
    create_error_response,
)

from .domain import (
    ValidationError,
    EmptyInputError,
    ConfigurationError,
)

from .auth import (
    AuthenticationError,
    InvalidCredentialsError,
    UserNotFoundError,
    DuplicateEmailError,
    MissingTokenError,
    InvalidSessionError,
    TokenError,
    InvalidTokenError,
    TokenExpiredError,
    TokenMalformedError,
    MalformedHashError,
)

from .http_mapping import HTTP_STATUS_MAP, get_http_status_code

__all__ = [
    # Base
    "NeoSessionError",
    "get_http_status_code",
    "create_error_response",
    "HTTP_STATUS_MAP",

    # Input and configuration
    "ValidationError",
    "EmptyInputError",
    "ConfigurationError",

    # Authentication
    "AuthenticationError",
    "InvalidCredentialsError",
    "UserNotFoundError",
    "DuplicateEmailError",
    "MissingTokenError",
    "InvalidSessionError",

    # Tokens and hashes
    "TokenError",
    "InvalidTokenError",
    "TokenExpiredError",
    "TokenMalformedError",
    "MalformedHashError",
]

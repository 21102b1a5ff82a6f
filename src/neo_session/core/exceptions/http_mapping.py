"""HTTP status code mapping for exceptions.

Lookup walks the exception's MRO so subclasses inherit the status of their
nearest mapped ancestor.
"""

from typing import Any, Dict, Optional, Type

from .auth import (
    AuthenticationError,
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidSessionError,
    InvalidTokenError,
    MalformedHashError,
    MissingTokenError,
    TokenError,
    TokenExpiredError,
    TokenMalformedError,
    UserNotFoundError,
)
from .domain import ConfigurationError, EmptyInputError, ValidationError


HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    # 400 Bad Request
    ValidationError: 400,
    EmptyInputError: 400,

    # 401 Unauthorized
    AuthenticationError: 401,
    InvalidCredentialsError: 401,
    MissingTokenError: 401,
    InvalidSessionError: 401,
    TokenError: 401,
    InvalidTokenError: 401,
    TokenExpiredError: 401,
    TokenMalformedError: 401,

    # 404 Not Found
    UserNotFoundError: 404,

    # 409 Conflict
    DuplicateEmailError: 409,

    # 500 Internal Server Error
    ConfigurationError: 500,
    MalformedHashError: 500,
}

DEFAULT_STATUS_CODE = 500


def get_http_status_code(
    exception: Exception,
    overrides: Optional[Dict[Type[Exception], int]] = None,
) -> int:
    """Get HTTP status code for an exception.

    Args:
        exception: The exception instance
        overrides: Optional per-application mapping checked before the defaults

    Returns:
        HTTP status code
    """
    mapping: Dict[Type[Exception], Any] = dict(HTTP_STATUS_MAP)
    if overrides:
        mapping.update(overrides)

    for exc_type in type(exception).__mro__:
        if exc_type in mapping:
            return mapping[exc_type]
    return DEFAULT_STATUS_CODE

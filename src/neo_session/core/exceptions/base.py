"""Base exceptions for neo-session.

This module defines the root of the neo-session exception hierarchy.
All exceptions inherit from NeoSessionError and carry an error code and
structured details so they can be turned into API error responses.
"""

from typing import Any, Dict, Optional


class NeoSessionError(Exception):
    """Base exception for all neo-session errors.

    All exceptions raised by the library inherit from this class and include
    structured error information for debugging and API responses.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


def create_error_response(exception: NeoSessionError) -> Dict[str, Any]:
    """Create standardized error response from exception.

    Args:
        exception: The neo-session exception

    Returns:
        Error response dictionary
    """
    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": exception.__class__.__name__,
        }
    }

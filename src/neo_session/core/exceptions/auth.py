"""Authentication-specific exceptions for neo-session."""

from .base import NeoSessionError


class AuthenticationError(NeoSessionError):
    """Base exception for authentication errors."""
    pass


class InvalidCredentialsError(AuthenticationError):
    """Raised when the submitted password does not match the stored hash."""
    pass


class UserNotFoundError(AuthenticationError):
    """Raised when no credential exists for the submitted email."""
    pass


class DuplicateEmailError(AuthenticationError):
    """Raised when registering an email that is already taken."""
    pass


class MissingTokenError(AuthenticationError):
    """Raised when the expected token cookie is absent from the request."""
    pass


class InvalidSessionError(AuthenticationError):
    """Raised when a refresh token fails verification."""
    pass


class TokenError(NeoSessionError):
    """Base exception for token verification failures."""
    pass


class InvalidTokenError(TokenError):
    """Raised when a token signature does not verify."""
    pass


class TokenExpiredError(TokenError):
    """Raised when a token is past its expiry."""
    pass


class TokenMalformedError(TokenError):
    """Raised when a token cannot be parsed into header, payload and signature."""
    pass


class MalformedHashError(NeoSessionError):
    """Raised when a stored password hash cannot be parsed."""
    pass

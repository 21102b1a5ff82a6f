"""Input validation and configuration exceptions."""

from .base import NeoSessionError


class ValidationError(NeoSessionError):
    """Raised when caller input is empty or malformed."""
    pass


class EmptyInputError(ValidationError):
    """Raised when a required secret or hash argument is empty."""
    pass


class ConfigurationError(NeoSessionError):
    """Raised when the service is constructed with an invalid configuration."""
    pass

"""Session API models."""

from .requests import CredentialsRequest
from .responses import (
    AccessTokenResponse,
    MessageResponse,
    SessionStatusResponse,
    SessionTokensResponse,
)

__all__ = [
    "CredentialsRequest",
    "AccessTokenResponse",
    "MessageResponse",
    "SessionStatusResponse",
    "SessionTokensResponse",
]

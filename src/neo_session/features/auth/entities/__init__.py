"""Auth entities and protocols."""

from .cookies import CookieOptions, SameSite
from .credential import Credential
from .protocols import (
    HeaderValue,
    RequestProtocol,
    ResponseProtocol,
    UserStoreProtocol,
)
from .session import RefreshedSession, SessionStatus, SessionTokens
from .tokens import REGISTERED_CLAIMS, TokenClass, TokenPayload

__all__ = [
    "CookieOptions",
    "SameSite",
    "Credential",
    "HeaderValue",
    "RequestProtocol",
    "ResponseProtocol",
    "UserStoreProtocol",
    "RefreshedSession",
    "SessionStatus",
    "SessionTokens",
    "REGISTERED_CLAIMS",
    "TokenClass",
    "TokenPayload",
]

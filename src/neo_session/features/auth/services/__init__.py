"""Auth services."""

from .cookie_service import (
    CookieService,
    decode_cookie_value,
    parse_cookie_header,
    serialize_cookie,
)
from .password_hasher import PasswordHasher, parse_hash
from .session_service import SessionService
from .token_service import TokenService

__all__ = [
    "CookieService",
    "decode_cookie_value",
    "parse_cookie_header",
    "serialize_cookie",
    "PasswordHasher",
    "parse_hash",
    "SessionService",
    "TokenService",
]

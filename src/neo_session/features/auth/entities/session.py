"""Results returned by session operations."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SessionTokens:
    """Tokens minted by register and login."""

    access_token: str
    refresh_token: str


@dataclass(frozen=True)
class SessionStatus:
    """Outcome of a session check."""

    is_valid: bool
    user_id: Optional[str] = None

    @classmethod
    def invalid(cls) -> "SessionStatus":
        return cls(is_valid=False, user_id=None)


@dataclass(frozen=True)
class RefreshedSession:
    """Access token minted by a refresh."""

    access_token: str

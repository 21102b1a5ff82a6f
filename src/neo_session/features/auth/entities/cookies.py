"""Cookie attribute entities."""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional


class SameSite(str, Enum):
    """SameSite cookie attribute values."""
    STRICT = "strict"
    LAX = "lax"
    NONE = "none"

    @property
    def header_value(self) -> str:
        """Value as written in a Set-Cookie header."""
        return self.value.capitalize()


@dataclass(frozen=True)
class CookieOptions:
    """Attributes attached to a cookie when it is written."""

    http_only: bool = True
    secure: bool = False
    same_site: Optional[SameSite] = None
    expires: Optional[datetime] = None
    max_age: Optional[int] = None
    path: Optional[str] = "/"
    domain: Optional[str] = None

    def __post_init__(self):
        if self.same_site == SameSite.NONE and not self.secure:
            raise ValueError("SameSite=None cookies must also be Secure")
        if self.max_age is not None and self.max_age < 0:
            raise ValueError(f"max_age must not be negative, got: {self.max_age}")
        if self.expires is not None and self.expires.utcoffset() is None:
            raise ValueError("expires must be a timezone-aware datetime")

    def expired(self) -> "CookieOptions":
        """Copy of these options that instructs the browser to drop the cookie."""
        return replace(self, max_age=0, expires=None)

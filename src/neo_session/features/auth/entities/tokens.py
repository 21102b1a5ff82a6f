"""Token entities."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class TokenClass(str, Enum):
    """Classes of bearer token, each signed with its own secret."""
    ACCESS = "access"
    REFRESH = "refresh"


# Claims set by the token service; custom claims may not override them.
REGISTERED_CLAIMS = frozenset({"sub", "iat", "exp", "typ"})


@dataclass(frozen=True)
class TokenPayload:
    """Decoded, verified contents of a signed token."""

    subject: str
    issued_at: datetime
    expires_at: datetime
    token_class: TokenClass
    claims: Dict[str, Any] = field(default_factory=dict)

    def get_claim(self, claim_name: str, default=None):
        """Get a custom claim from the token."""
        return self.claims.get(claim_name, default)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Check if the payload is past its expiry."""
        now = now or datetime.now(timezone.utc)
        return now > self.expires_at

    @classmethod
    def from_claims(cls, claims: Dict[str, Any], token_class: TokenClass) -> "TokenPayload":
        """Build a payload from a verified claim set."""
        return cls(
            subject=claims["sub"],
            issued_at=datetime.fromtimestamp(claims["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
            token_class=token_class,
            claims={
                key: value
                for key, value in claims.items()
                if key not in REGISTERED_CLAIMS
            },
        )

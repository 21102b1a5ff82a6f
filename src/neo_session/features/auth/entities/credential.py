"""Stored credential entity."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Credential:
    """A user's email and password hash as held by the user store."""

    id: str
    email: str
    password_hash: str = field(repr=False)

    def __post_init__(self):
        if not self.id:
            raise ValueError("Credential id is required")
        if not self.email:
            raise ValueError("Credential email is required")

"""In-memory user store."""

import asyncio
import logging
from typing import Dict, Optional
from uuid import uuid4

from ....core.exceptions import DuplicateEmailError
from ..entities.credential import Credential
from ..entities.protocols import UserStoreProtocol

logger = logging.getLogger(__name__)


class MemoryUserStore(UserStoreProtocol):
    """User store backed by a dict, keyed by lower-cased email.

    Suitable for tests and single-process development servers.
    """

    def __init__(self):
        self._users: Dict[str, Credential] = {}
        self._lock = asyncio.Lock()

    @staticmethod
    def _key(email: str) -> str:
        return email.strip().lower()

    async def find_by_email(self, email: str) -> Optional[Credential]:
        return self._users.get(self._key(email))

    async def create_user(self, email: str, password_hash: str) -> Credential:
        key = self._key(email)
        async with self._lock:
            if key in self._users:
                raise DuplicateEmailError("Email already in use", details={"field": "email"})
            credential = Credential(id=str(uuid4()), email=email, password_hash=password_hash)
            self._users[key] = credential

        logger.debug(f"Stored credential for user {credential.id}")
        return credential

    def __len__(self) -> int:
        return len(self._users)

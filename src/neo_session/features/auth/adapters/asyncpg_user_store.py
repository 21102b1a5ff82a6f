"""PostgreSQL user store using asyncpg."""

import logging
import re
from typing import Optional

from asyncpg.exceptions import UniqueViolationError

from ....core.exceptions import DuplicateEmailError
from ..entities.credential import Credential
from ..entities.protocols import UserStoreProtocol

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS {table} (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    email TEXT NOT NULL,
    password_hash TEXT NOT NULL,
    created_at TIMESTAMPTZ NOT NULL DEFAULT now()
);
CREATE UNIQUE INDEX IF NOT EXISTS {index} ON {table} (lower(email));
"""


class AsyncpgUserStore(UserStoreProtocol):
    """User store over an asyncpg connection pool.

    Email uniqueness is enforced by a unique index on ``lower(email)``; a
    conflicting insert surfaces as ``DuplicateEmailError``. All other database
    errors propagate unchanged.
    """

    def __init__(self, pool, table: str = "users"):
        """Initialize store.

        Args:
            pool: asyncpg pool (anything with an ``acquire()`` async context)
            table: Table name, optionally schema-qualified
        """
        if pool is None:
            raise ValueError("Connection pool is required")
        if not _IDENTIFIER.match(table):
            raise ValueError(f"Invalid table name: {table}")
        self.pool = pool
        self.table = table

    def create_table_sql(self) -> str:
        """DDL for the table and unique email index this store expects."""
        index = f"{self.table.replace('.', '_')}_email_lower_key"
        return CREATE_TABLE_SQL.format(table=self.table, index=index)

    async def find_by_email(self, email: str) -> Optional[Credential]:
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                f"""
                SELECT id, email, password_hash
                FROM {self.table}
                WHERE lower(email) = lower($1)
                """,
                email.strip(),
            )

        if row is None:
            return None
        return Credential(
            id=str(row["id"]),
            email=row["email"],
            password_hash=row["password_hash"],
        )

    async def create_user(self, email: str, password_hash: str) -> Credential:
        try:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"""
                    INSERT INTO {self.table} (email, password_hash)
                    VALUES ($1, $2)
                    RETURNING id
                    """,
                    email.strip(),
                    password_hash,
                )
        except UniqueViolationError as e:
            logger.info("Insert rejected by unique email index")
            raise DuplicateEmailError("Email already in use", details={"field": "email"}) from e

        credential = Credential(id=str(row["id"]), email=email.strip(), password_hash=password_hash)
        logger.debug(f"Stored credential for user {credential.id}")
        return credential

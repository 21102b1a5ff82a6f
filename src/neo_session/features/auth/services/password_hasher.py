"""Password hashing service.

Hashes are produced with scrypt and stored in a self-describing form::

    $scrypt$ln=14,r=8,p=1$<salt>$<digest>

where ``ln`` is log2 of the CPU/memory cost, ``r`` the block size and ``p``
the parallelism; salt and digest are unpadded standard base64. Verification
re-derives the digest with the embedded parameters and compares it in
constant time.
"""

import base64
import binascii
import os
from dataclasses import dataclass

from cryptography.hazmat.primitives import constant_time
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from ....core.exceptions import EmptyInputError, MalformedHashError

SCHEME = "scrypt"

DEFAULT_COST = 14
DEFAULT_BLOCK_SIZE = 8
DEFAULT_PARALLELISM = 1
DEFAULT_SALT_SIZE = 16
DEFAULT_DIGEST_SIZE = 32

# Upper bounds for parameters read back from stored hashes
MAX_COST = 20
MAX_BLOCK_SIZE = 32
MAX_PARALLELISM = 16


def _b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii").rstrip("=")


def _b64decode(text: str) -> bytes:
    return base64.b64decode(text + "=" * (-len(text) % 4), validate=True)


@dataclass(frozen=True)
class ParsedHash:
    """Components of a stored password hash."""

    cost: int
    block_size: int
    parallelism: int
    salt: bytes
    digest: bytes


def parse_hash(stored: str) -> ParsedHash:
    """Split a stored hash into its parameters, salt and digest.

    Raises:
        MalformedHashError: if the string is not a well-formed scrypt hash
    """
    parts = stored.split("$")
    # Leading "$" yields an empty first field
    if len(parts) != 5 or parts[0] != "" or parts[1] != SCHEME:
        raise MalformedHashError("Stored hash is not in scrypt format")

    try:
        params = dict(item.split("=", 1) for item in parts[2].split(","))
        cost = int(params["ln"])
        block_size = int(params["r"])
        parallelism = int(params["p"])
    except (KeyError, ValueError) as e:
        raise MalformedHashError("Stored hash has invalid parameters") from e

    if not (
        1 <= cost <= MAX_COST
        and 1 <= block_size <= MAX_BLOCK_SIZE
        and 1 <= parallelism <= MAX_PARALLELISM
    ):
        raise MalformedHashError("Stored hash parameters are out of range")

    try:
        salt = _b64decode(parts[3])
        digest = _b64decode(parts[4])
    except (binascii.Error, ValueError) as e:
        raise MalformedHashError("Stored hash has invalid encoding") from e

    if not salt or not digest:
        raise MalformedHashError("Stored hash is missing salt or digest")

    return ParsedHash(
        cost=cost,
        block_size=block_size,
        parallelism=parallelism,
        salt=salt,
        digest=digest,
    )


class PasswordHasher:
    """One-way password hashing with constant-time verification."""

    def __init__(
        self,
        cost: int = DEFAULT_COST,
        block_size: int = DEFAULT_BLOCK_SIZE,
        parallelism: int = DEFAULT_PARALLELISM,
        salt_size: int = DEFAULT_SALT_SIZE,
        digest_size: int = DEFAULT_DIGEST_SIZE,
    ):
        """Initialize hasher with scrypt cost parameters.

        Args:
            cost: log2 of the scrypt CPU/memory cost N
            block_size: scrypt block size r
            parallelism: scrypt parallelism p
            salt_size: bytes of random salt per hash
            digest_size: bytes of derived digest
        """
        if not 1 <= cost <= MAX_COST:
            raise ValueError(f"cost must be between 1 and {MAX_COST}, got: {cost}")
        self.cost = cost
        self.block_size = block_size
        self.parallelism = parallelism
        self.salt_size = salt_size
        self.digest_size = digest_size

    def _derive(
        self,
        password: str,
        salt: bytes,
        cost: int,
        block_size: int,
        parallelism: int,
        length: int,
    ) -> bytes:
        kdf = Scrypt(
            salt=salt,
            length=length,
            n=2 ** cost,
            r=block_size,
            p=parallelism,
        )
        return kdf.derive(password.encode("utf-8"))

    def hash(self, password: str) -> str:
        """Hash a password with a fresh random salt.

        Raises:
            EmptyInputError: if the password is empty or whitespace
        """
        if not password or not password.strip():
            raise EmptyInputError("Password must not be empty")

        salt = os.urandom(self.salt_size)
        digest = self._derive(
            password,
            salt,
            self.cost,
            self.block_size,
            self.parallelism,
            self.digest_size,
        )
        params = f"ln={self.cost},r={self.block_size},p={self.parallelism}"
        return f"${SCHEME}${params}${_b64encode(salt)}${_b64encode(digest)}"

    def verify(self, password: str, stored: str) -> bool:
        """Check a password against a stored hash.

        Raises:
            EmptyInputError: if either argument is empty
            MalformedHashError: if the stored hash cannot be parsed
        """
        if not password or not stored:
            raise EmptyInputError("Password and stored hash are required")

        parsed = parse_hash(stored)
        try:
            candidate = self._derive(
                password,
                parsed.salt,
                parsed.cost,
                parsed.block_size,
                parsed.parallelism,
                len(parsed.digest),
            )
        except ValueError as e:
            raise MalformedHashError("Stored hash parameters are not usable") from e

        return constant_time.bytes_eq(candidate, parsed.digest)

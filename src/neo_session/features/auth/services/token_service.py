"""Signed token service for access and refresh tokens.

Access and refresh tokens are HS256 JWTs signed with independent secrets.
Each class has its own signing key object and its own public entry points,
so a token can only ever be checked against the key of the class the caller
asked for.
"""

import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

from jose import jws, jwt
from jose.exceptions import JOSEError

from ....core.exceptions import (
    ConfigurationError,
    InvalidTokenError,
    TokenExpiredError,
    TokenMalformedError,
    ValidationError,
)
from ..entities.tokens import REGISTERED_CLAIMS, TokenClass, TokenPayload

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

DEFAULT_ACCESS_TOKEN_TTL = timedelta(minutes=15)
DEFAULT_REFRESH_TOKEN_TTL = timedelta(days=3)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class _SigningKey:
    """Secret, lifetime and class label for one token class."""

    __slots__ = ("token_class", "_secret", "ttl")

    def __init__(self, token_class: TokenClass, secret: str, ttl: timedelta):
        if not secret:
            raise ConfigurationError(f"{token_class.value} token secret must not be empty")
        if ttl <= timedelta(0):
            raise ConfigurationError(f"{token_class.value} token lifetime must be positive")
        self.token_class = token_class
        self._secret = secret
        self.ttl = ttl

    @property
    def secret(self) -> str:
        return self._secret

    def __repr__(self) -> str:
        return f"_SigningKey(token_class={self.token_class.value!r}, ttl={self.ttl!r})"


class TokenService:
    """Issues and verifies access and refresh tokens."""

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        access_ttl: timedelta = DEFAULT_ACCESS_TOKEN_TTL,
        refresh_ttl: timedelta = DEFAULT_REFRESH_TOKEN_TTL,
        clock: Optional[Clock] = None,
    ):
        """Initialize token service with one secret and lifetime per class.

        Raises:
            ConfigurationError: if the secrets are empty or equal, or the
                access lifetime is not shorter than the refresh lifetime
        """
        if access_secret == refresh_secret:
            raise ConfigurationError("Access and refresh token secrets must differ")
        if access_ttl >= refresh_ttl:
            raise ConfigurationError(
                "Access token lifetime must be shorter than refresh token lifetime"
            )
        self._access_key = _SigningKey(TokenClass.ACCESS, access_secret, access_ttl)
        self._refresh_key = _SigningKey(TokenClass.REFRESH, refresh_secret, refresh_ttl)
        self._clock = clock or utc_now

    @property
    def access_ttl(self) -> timedelta:
        return self._access_key.ttl

    @property
    def refresh_ttl(self) -> timedelta:
        return self._refresh_key.ttl

    def create_access_token(
        self,
        subject: str,
        claims: Optional[Dict[str, Any]] = None,
        ttl: Optional[timedelta] = None,
    ) -> str:
        """Sign a short-lived access token for a subject."""
        return self._issue(self._access_key, subject, claims, ttl)

    def create_refresh_token(
        self,
        subject: str,
        claims: Optional[Dict[str, Any]] = None,
        ttl: Optional[timedelta] = None,
    ) -> str:
        """Sign a long-lived refresh token for a subject."""
        return self._issue(self._refresh_key, subject, claims, ttl)

    def verify_access_token(self, token: str) -> TokenPayload:
        """Verify an access token and return its payload.

        Raises:
            TokenMalformedError: if the token cannot be parsed
            InvalidTokenError: if the signature or token class does not match
            TokenExpiredError: if the token is past its expiry
        """
        return self._verify(self._access_key, token)

    def verify_refresh_token(self, token: str) -> TokenPayload:
        """Verify a refresh token and return its payload.

        Raises:
            TokenMalformedError: if the token cannot be parsed
            InvalidTokenError: if the signature or token class does not match
            TokenExpiredError: if the token is past its expiry
        """
        return self._verify(self._refresh_key, token)

    def _issue(
        self,
        key: _SigningKey,
        subject: str,
        claims: Optional[Dict[str, Any]],
        ttl: Optional[timedelta],
    ) -> str:
        if not subject:
            raise ValidationError("Token subject is required")

        custom_claims = dict(claims or {})
        reserved = REGISTERED_CLAIMS.intersection(custom_claims)
        if reserved:
            raise ValidationError(
                "Custom claims may not override registered claims",
                details={"claims": sorted(reserved)},
            )

        lifetime = ttl if ttl is not None else key.ttl
        if lifetime <= timedelta(0):
            raise ValidationError("Token lifetime must be positive")

        issued_at = self._clock()
        expires_at = issued_at + lifetime
        body = {
            **custom_claims,
            "sub": subject,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
            "typ": key.token_class.value,
        }

        logger.debug(f"Issuing {key.token_class.value} token for subject {subject}")
        return jwt.encode(body, key.secret, algorithm=ALGORITHM)

    def _verify(self, key: _SigningKey, token: str) -> TokenPayload:
        if not token or not isinstance(token, str) or token.count(".") != 2:
            raise TokenMalformedError("Token is not a compact JWS")

        # Parses the three sections and the header only; claims stay untouched
        try:
            header = jwt.get_unverified_header(token)
        except JOSEError as e:
            raise TokenMalformedError("Token sections cannot be decoded") from e

        if header.get("alg") != ALGORITHM:
            logger.warning(f"Rejected {key.token_class.value} token with unexpected algorithm")
            raise InvalidTokenError("Token signature is invalid")

        try:
            payload = jws.verify(token, key.secret, algorithms=[ALGORITHM])
        except JOSEError as e:
            logger.warning(f"Invalid {key.token_class.value} token signature")
            raise InvalidTokenError("Token signature is invalid") from e

        try:
            claims = json.loads(payload)
        except ValueError as e:
            raise TokenMalformedError("Token claims are not valid JSON") from e

        if not isinstance(claims, dict):
            raise TokenMalformedError("Token claims must be a JSON object")
        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject:
            raise TokenMalformedError("Token is missing the 'sub' claim")
        for claim in ("iat", "exp"):
            if not isinstance(claims.get(claim), int) or isinstance(claims.get(claim), bool):
                raise TokenMalformedError(f"Token is missing the '{claim}' claim")

        if claims.get("typ") != key.token_class.value:
            logger.warning(f"Rejected token presented as {key.token_class.value} token")
            raise InvalidTokenError("Token class does not match")

        now = self._clock()
        if now.timestamp() > claims["exp"]:
            logger.info(f"Expired {key.token_class.value} token for subject {subject}")
            raise TokenExpiredError("Token has expired")

        return TokenPayload.from_claims(claims, key.token_class)

"""Session service - orchestrates register, login, logout, check and refresh."""

import asyncio
import logging
from datetime import timedelta
from typing import Optional

from ....config.settings import SessionSettings
from ....core.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidSessionError,
    MissingTokenError,
    TokenError,
    UserNotFoundError,
    ValidationError,
)
from ..entities.cookies import CookieOptions, SameSite
from ..entities.protocols import RequestProtocol, ResponseProtocol, UserStoreProtocol
from ..entities.session import RefreshedSession, SessionStatus, SessionTokens
from .cookie_service import CookieService
from .password_hasher import PasswordHasher
from .token_service import TokenService

logger = logging.getLogger(__name__)

# Verified against when an email is unknown so both login failure paths cost
# one hash computation
_TIMING_PLACEHOLDER = "timing-placeholder"


def normalize_email(email: Optional[str]) -> str:
    """Trim an email, failing if nothing is left."""
    normalized = (email or "").strip()
    if not normalized:
        raise ValidationError("Email is required", details={"field": "email"})
    return normalized


def require_password(password: Optional[str]) -> str:
    """Reject empty passwords without altering the submitted value."""
    if not password or not password.strip():
        raise ValidationError("Password is required", details={"field": "password"})
    return password


class SessionService:
    """Stateless session lifecycle built on the hasher, token and cookie services.

    Refresh keeps a fixed renewal window: it mints a new access token and
    never reissues the refresh token, so a session ends when the refresh token
    issued at login expires.
    """

    def __init__(
        self,
        user_store: UserStoreProtocol,
        password_hasher: PasswordHasher,
        token_service: TokenService,
        cookie_service: CookieService,
        settings: SessionSettings,
    ):
        """Initialize session service with its collaborators.

        Raises:
            ConfigurationError: if the settings are not usable
        """
        settings.ensure_valid()
        self.user_store = user_store
        self.password_hasher = password_hasher
        self.token_service = token_service
        self.cookie_service = cookie_service
        self.settings = settings
        self._timing_hash = password_hasher.hash(_TIMING_PLACEHOLDER)

    # Cookie policy

    def _cookie_options(self, max_age: timedelta) -> CookieOptions:
        if self.settings.is_production:
            same_site = SameSite.NONE if self.settings.cross_site_cookies else SameSite.LAX
            return CookieOptions(
                http_only=True,
                secure=True,
                same_site=same_site,
                max_age=int(max_age.total_seconds()),
                path=self.settings.cookie_path,
                domain=self.settings.cookie_domain,
            )
        return CookieOptions(
            http_only=True,
            secure=False,
            same_site=SameSite.LAX,
            max_age=int(max_age.total_seconds()),
            path=self.settings.cookie_path,
        )

    def access_cookie_options(self) -> CookieOptions:
        """Attributes used for the access token cookie."""
        return self._cookie_options(self.token_service.access_ttl)

    def refresh_cookie_options(self) -> CookieOptions:
        """Attributes used for the refresh token cookie."""
        return self._cookie_options(self.token_service.refresh_ttl)

    def _attach_tokens(self, response: ResponseProtocol, tokens: SessionTokens) -> None:
        self.cookie_service.write(
            response,
            self.settings.access_token_cookie,
            tokens.access_token,
            self.access_cookie_options(),
        )
        self.cookie_service.write(
            response,
            self.settings.refresh_token_cookie,
            tokens.refresh_token,
            self.refresh_cookie_options(),
        )

    def _issue_tokens(self, user_id: str) -> SessionTokens:
        return SessionTokens(
            access_token=self.token_service.create_access_token(user_id),
            refresh_token=self.token_service.create_refresh_token(user_id),
        )

    # Operations

    async def register(
        self,
        email: str,
        password: str,
        response: Optional[ResponseProtocol] = None,
    ) -> SessionTokens:
        """Create a user and start a session for it.

        Raises:
            ValidationError: if email or password is empty
            DuplicateEmailError: if the email is already registered
        """
        email = normalize_email(email)
        password = require_password(password)

        if await self.user_store.find_by_email(email) is not None:
            logger.info("Registration rejected: email already registered")
            raise DuplicateEmailError("Email already in use", details={"field": "email"})

        password_hash = await asyncio.to_thread(self.password_hasher.hash, password)
        # A concurrent registration can still win the insert; the store then
        # raises DuplicateEmailError itself.
        credential = await self.user_store.create_user(email, password_hash)

        tokens = self._issue_tokens(credential.id)
        if response is not None:
            self._attach_tokens(response, tokens)

        logger.info(f"Registered user {credential.id}")
        return tokens

    async def login(
        self,
        email: str,
        password: str,
        response: Optional[ResponseProtocol] = None,
    ) -> SessionTokens:
        """Authenticate a user and start a session.

        Raises:
            ValidationError: if email or password is empty
            UserNotFoundError: if no user is registered for the email
            InvalidCredentialsError: if the password does not match
        """
        email = normalize_email(email)
        password = require_password(password)

        credential = await self.user_store.find_by_email(email)
        if credential is None:
            await asyncio.to_thread(self._burn_verification, password)
            logger.info("Login rejected: unknown email")
            raise UserNotFoundError("User not found")

        matches = await asyncio.to_thread(
            self.password_hasher.verify, password, credential.password_hash
        )
        if not matches:
            logger.warning(f"Login rejected for user {credential.id}: invalid credentials")
            raise InvalidCredentialsError("Invalid email or password")

        tokens = self._issue_tokens(credential.id)
        if response is not None:
            self._attach_tokens(response, tokens)

        logger.info(f"User {credential.id} logged in")
        return tokens

    async def logout(self, response: ResponseProtocol) -> None:
        """Clear both session cookies."""
        self.cookie_service.clear(
            response, self.settings.access_token_cookie, self.access_cookie_options()
        )
        self.cookie_service.clear(
            response, self.settings.refresh_token_cookie, self.refresh_cookie_options()
        )
        logger.debug("Cleared session cookies")

    async def check_session(self, request: RequestProtocol) -> SessionStatus:
        """Report whether the request carries a valid access token.

        Never raises for missing or bad tokens; those are reported as an
        invalid session.
        """
        access_token = self.cookie_service.read(request, self.settings.access_token_cookie)
        if access_token is None:
            return SessionStatus.invalid()
        return self.check_access_token(access_token)

    def check_access_token(self, access_token: str) -> SessionStatus:
        """Session check for callers holding the access token directly."""
        try:
            payload = self.token_service.verify_access_token(access_token)
        except TokenError as e:
            logger.debug(f"Session check failed: {e.error_code}")
            return SessionStatus.invalid()
        return SessionStatus(is_valid=True, user_id=payload.subject)

    async def refresh_session(
        self,
        request: RequestProtocol,
        response: Optional[ResponseProtocol] = None,
    ) -> RefreshedSession:
        """Mint a new access token from the request's refresh cookie.

        Raises:
            MissingTokenError: if the refresh cookie is absent
            InvalidSessionError: if the refresh token fails verification
        """
        refresh_token = self.cookie_service.read(request, self.settings.refresh_token_cookie)
        if refresh_token is None:
            raise MissingTokenError("Refresh token cookie is missing")

        refreshed = self.refresh_access_token(refresh_token)
        if response is not None:
            self.cookie_service.write(
                response,
                self.settings.access_token_cookie,
                refreshed.access_token,
                self.access_cookie_options(),
            )
        return refreshed

    def refresh_access_token(self, refresh_token: str) -> RefreshedSession:
        """Refresh for callers holding the refresh token directly.

        Raises:
            InvalidSessionError: if the refresh token fails verification
        """
        try:
            payload = self.token_service.verify_refresh_token(refresh_token)
        except TokenError as e:
            logger.info(f"Refresh rejected: {e.error_code}")
            raise InvalidSessionError(
                "Session is no longer valid",
                details={"reason": e.error_code},
            ) from e

        logger.debug(f"Refreshed access token for user {payload.subject}")
        return RefreshedSession(
            access_token=self.token_service.create_access_token(payload.subject)
        )

    def _burn_verification(self, password: str) -> None:
        self.password_hasher.verify(password, self._timing_hash)

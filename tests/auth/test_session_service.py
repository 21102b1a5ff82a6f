"""Tests for the session service."""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from neo_session.core.exceptions import (
    ConfigurationError,
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidSessionError,
    MissingTokenError,
    TokenExpiredError,
    UserNotFoundError,
    ValidationError,
)
from neo_session.features.auth.adapters.http_messages import HeaderRequest, HeaderResponse
from neo_session.features.auth.entities.credential import Credential
from neo_session.features.auth.entities.session import SessionStatus
from neo_session.features.auth.factory import create_session_service
from neo_session.features.auth.services.cookie_service import CookieService
from neo_session.features.auth.services.session_service import SessionService


def _cookie_request(**cookies) -> HeaderRequest:
    return HeaderRequest.with_cookies(cookies)


class TestRegister:
    """Registration."""

    @pytest.mark.asyncio
    async def test_register_returns_verifiable_tokens(self, session_service, user_store):
        tokens = await session_service.register("a@x.com", "pw")

        credential = await user_store.find_by_email("a@x.com")
        access = session_service.token_service.verify_access_token(tokens.access_token)
        refresh = session_service.token_service.verify_refresh_token(tokens.refresh_token)
        assert access.subject == credential.id
        assert refresh.subject == credential.id

    @pytest.mark.asyncio
    async def test_register_stores_hash_not_password(self, session_service, user_store, password_hasher):
        await session_service.register("a@x.com", "pw")

        credential = await user_store.find_by_email("a@x.com")
        assert credential.password_hash != "pw"
        assert password_hasher.verify("pw", credential.password_hash)

    @pytest.mark.asyncio
    async def test_register_trims_email(self, session_service, user_store):
        await session_service.register("  a@x.com  ", "pw")

        credential = await user_store.find_by_email("a@x.com")
        assert credential.email == "a@x.com"

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, session_service):
        await session_service.register("a@x.com", "pw")

        with pytest.raises(DuplicateEmailError):
            await session_service.register("a@x.com", "pw2")

    @pytest.mark.asyncio
    async def test_duplicate_email_is_case_insensitive(self, session_service):
        await session_service.register("a@x.com", "pw")

        with pytest.raises(DuplicateEmailError):
            await session_service.register("A@X.com", "pw2")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email, password", [("", "pw"), ("   ", "pw"), ("a@x.com", ""), ("a@x.com", "  ")])
    async def test_empty_input_rejected(self, session_service, email, password):
        with pytest.raises(ValidationError):
            await session_service.register(email, password)

    @pytest.mark.asyncio
    async def test_store_uniqueness_race_surfaces_as_duplicate(self, settings, password_hasher, clock):
        """The store rejecting the insert is reported as DuplicateEmailError."""
        store = AsyncMock()
        store.find_by_email.return_value = None
        store.create_user.side_effect = DuplicateEmailError("Email already in use")
        service = create_session_service(store, settings=settings, password_hasher=password_hasher, clock=clock)

        with pytest.raises(DuplicateEmailError):
            await service.register("a@x.com", "pw")

    @pytest.mark.asyncio
    async def test_store_errors_propagate_unchanged(self, settings, password_hasher, clock):
        store = AsyncMock()
        store.find_by_email.side_effect = ConnectionError("database unavailable")
        service = create_session_service(store, settings=settings, password_hasher=password_hasher, clock=clock)

        with pytest.raises(ConnectionError):
            await service.register("a@x.com", "pw")

    @pytest.mark.asyncio
    async def test_register_sets_development_cookies(self, session_service):
        response = HeaderResponse()

        tokens = await session_service.register("a@x.com", "pw", response)

        assert response.get_all("Set-Cookie") == [
            f"access_token={tokens.access_token}; HttpOnly; SameSite=Lax; Max-Age=900; Path=/",
            f"refresh_token={tokens.refresh_token}; HttpOnly; SameSite=Lax; Max-Age=259200; Path=/",
        ]

    @pytest.mark.asyncio
    async def test_register_sets_production_cookies(self, production_session_service):
        response = HeaderResponse()

        tokens = await production_session_service.register("a@x.com", "pw", response)

        assert response.get_all("Set-Cookie") == [
            f"access_token={tokens.access_token}; HttpOnly; Secure; SameSite=None; "
            "Max-Age=900; Path=/; Domain=example.com",
            f"refresh_token={tokens.refresh_token}; HttpOnly; Secure; SameSite=None; "
            "Max-Age=259200; Path=/; Domain=example.com",
        ]

    @pytest.mark.asyncio
    async def test_same_site_production_cookies(self, user_store, settings_factory, password_hasher, clock):
        settings = settings_factory(
            environment="production", cookie_domain="example.com", cross_site_cookies=False
        )
        service = create_session_service(user_store, settings=settings, password_hasher=password_hasher, clock=clock)
        response = HeaderResponse()

        await service.register("a@x.com", "pw", response)

        for cookie in response.get_all("Set-Cookie"):
            assert "; Secure; SameSite=Lax;" in cookie
            assert cookie.endswith("Domain=example.com")


class TestLogin:
    """Login."""

    @pytest.mark.asyncio
    async def test_login_after_register(self, session_service, user_store):
        await session_service.register("a@x.com", "pw")
        response = HeaderResponse()

        tokens = await session_service.login("a@x.com", "pw", response)

        credential = await user_store.find_by_email("a@x.com")
        assert session_service.token_service.verify_access_token(tokens.access_token).subject == credential.id
        assert len(response.get_all("Set-Cookie")) == 2

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, session_service):
        with pytest.raises(UserNotFoundError):
            await session_service.login("missing@x.com", "pw")

    @pytest.mark.asyncio
    async def test_unknown_email_costs_one_verification(self, user_store, settings, password_hasher, clock):
        hasher = MagicMock(wraps=password_hasher)
        service = create_session_service(user_store, settings=settings, password_hasher=hasher, clock=clock)
        hasher.reset_mock()

        for _ in range(2):
            with pytest.raises(UserNotFoundError):
                await service.login("missing@x.com", "pw")

        hasher.hash.assert_not_called()
        assert hasher.verify.call_count == 2

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, session_service):
        await session_service.register("a@x.com", "pw")

        with pytest.raises(InvalidCredentialsError):
            await session_service.login("a@x.com", "wrong")

    @pytest.mark.asyncio
    async def test_login_trims_email(self, session_service):
        await session_service.register("a@x.com", "pw")

        tokens = await session_service.login(" a@x.com ", "pw")

        assert tokens.access_token

    @pytest.mark.asyncio
    async def test_login_does_not_trim_password(self, session_service):
        await session_service.register("a@x.com", "pw")

        with pytest.raises(InvalidCredentialsError):
            await session_service.login("a@x.com", " pw ")

    @pytest.mark.asyncio
    async def test_login_rejects_empty_email(self, session_service):
        with pytest.raises(ValidationError):
            await session_service.login(" ", "pw")

    @pytest.mark.asyncio
    async def test_login_with_mocked_store(self, settings, password_hasher, clock):
        store = AsyncMock()
        store.find_by_email.return_value = Credential(
            id="user-42", email="a@x.com", password_hash=password_hasher.hash("pw")
        )
        service = create_session_service(store, settings=settings, password_hasher=password_hasher, clock=clock)

        tokens = await service.login("a@x.com", "pw")

        assert service.token_service.verify_access_token(tokens.access_token).subject == "user-42"
        store.find_by_email.assert_awaited_once_with("a@x.com")


class TestLogout:
    """Logout."""

    @pytest.mark.asyncio
    async def test_logout_clears_both_cookies(self, session_service):
        response = HeaderResponse()

        await session_service.logout(response)

        assert response.get_all("Set-Cookie") == [
            "access_token=; HttpOnly; SameSite=Lax; Max-Age=0; Path=/",
            "refresh_token=; HttpOnly; SameSite=Lax; Max-Age=0; Path=/",
        ]

    @pytest.mark.asyncio
    async def test_logout_matches_production_attributes(self, production_session_service):
        response = HeaderResponse()

        await production_session_service.logout(response)

        assert response.get_all("Set-Cookie") == [
            "access_token=; HttpOnly; Secure; SameSite=None; Max-Age=0; Path=/; Domain=example.com",
            "refresh_token=; HttpOnly; Secure; SameSite=None; Max-Age=0; Path=/; Domain=example.com",
        ]


class TestCheckSession:
    """Session checks."""

    @pytest.mark.asyncio
    async def test_no_cookie_is_invalid(self, session_service):
        status = await session_service.check_session(HeaderRequest())

        assert status == SessionStatus(is_valid=False, user_id=None)

    @pytest.mark.asyncio
    async def test_valid_access_cookie(self, session_service, user_store):
        tokens = await session_service.register("a@x.com", "pw")
        credential = await user_store.find_by_email("a@x.com")

        status = await session_service.check_session(_cookie_request(access_token=tokens.access_token))

        assert status == SessionStatus(is_valid=True, user_id=credential.id)

    @pytest.mark.asyncio
    async def test_expired_access_cookie_is_invalid(self, session_service, clock):
        tokens = await session_service.register("a@x.com", "pw")
        clock.advance(15 * 60 + 1)

        status = await session_service.check_session(_cookie_request(access_token=tokens.access_token))

        assert status.is_valid is False
        assert status.user_id is None

    @pytest.mark.asyncio
    async def test_refresh_token_in_access_cookie_is_invalid(self, session_service):
        tokens = await session_service.register("a@x.com", "pw")

        status = await session_service.check_session(_cookie_request(access_token=tokens.refresh_token))

        assert status.is_valid is False

    @pytest.mark.asyncio
    async def test_garbage_cookie_is_invalid(self, session_service):
        status = await session_service.check_session(_cookie_request(access_token="garbage"))

        assert status.is_valid is False

    def test_headless_check(self, session_service):
        token = session_service.token_service.create_access_token("user-1")

        assert session_service.check_access_token(token) == SessionStatus(is_valid=True, user_id="user-1")


class TestRefreshSession:
    """Refreshing the access token."""

    @pytest.mark.asyncio
    async def test_refresh_issues_new_access_token(self, session_service, user_store, clock):
        tokens = await session_service.register("a@x.com", "pw")
        credential = await user_store.find_by_email("a@x.com")
        clock.advance(20 * 60)
        response = HeaderResponse()

        refreshed = await session_service.refresh_session(
            _cookie_request(refresh_token=tokens.refresh_token), response
        )

        payload = session_service.token_service.verify_access_token(refreshed.access_token)
        assert payload.subject == credential.id
        assert response.get_all("Set-Cookie") == [
            f"access_token={refreshed.access_token}; HttpOnly; SameSite=Lax; Max-Age=900; Path=/"
        ]

    @pytest.mark.asyncio
    async def test_refresh_without_cookie(self, session_service):
        with pytest.raises(MissingTokenError):
            await session_service.refresh_session(HeaderRequest())

    @pytest.mark.asyncio
    async def test_refresh_with_expired_token(self, session_service, clock):
        tokens = await session_service.register("a@x.com", "pw")
        clock.advance(timedelta(days=3).total_seconds() + 1)

        with pytest.raises(InvalidSessionError) as exc_info:
            await session_service.refresh_session(_cookie_request(refresh_token=tokens.refresh_token))

        assert isinstance(exc_info.value.__cause__, TokenExpiredError)
        assert exc_info.value.details == {"reason": "TokenExpiredError"}

    @pytest.mark.asyncio
    async def test_refresh_rejects_access_token(self, session_service):
        tokens = await session_service.register("a@x.com", "pw")

        with pytest.raises(InvalidSessionError):
            await session_service.refresh_session(_cookie_request(refresh_token=tokens.access_token))

    @pytest.mark.asyncio
    async def test_refresh_rejects_malformed_token(self, session_service):
        with pytest.raises(InvalidSessionError):
            await session_service.refresh_session(_cookie_request(refresh_token="garbage"))

    @pytest.mark.asyncio
    async def test_refresh_keeps_fixed_window(self, session_service, clock):
        """Refreshing does not extend the refresh token's lifetime."""
        tokens = await session_service.register("a@x.com", "pw")
        clock.advance(timedelta(days=2).total_seconds())
        await session_service.refresh_session(_cookie_request(refresh_token=tokens.refresh_token))
        clock.advance(timedelta(days=1).total_seconds() + 1)

        with pytest.raises(InvalidSessionError):
            await session_service.refresh_session(_cookie_request(refresh_token=tokens.refresh_token))

    def test_headless_refresh(self, session_service):
        refresh_token = session_service.token_service.create_refresh_token("user-1")

        refreshed = session_service.refresh_access_token(refresh_token)

        assert session_service.token_service.verify_access_token(refreshed.access_token).subject == "user-1"


class TestConstruction:
    """Configuration checks at construction."""

    def test_production_requires_cookie_domain(self, user_store, settings_factory):
        settings = settings_factory(environment="production")

        with pytest.raises(ConfigurationError):
            create_session_service(user_store, settings=settings)

    def test_service_validates_settings(self, user_store, settings_factory, password_hasher, token_service):
        settings = settings_factory(environment="production", cookie_domain="  ")

        with pytest.raises(ConfigurationError):
            SessionService(user_store, password_hasher, token_service, CookieService(), settings)

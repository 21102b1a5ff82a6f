"""Pytest configuration and fixtures for neo-session tests."""

from datetime import datetime, timedelta, timezone

import pytest

from neo_session.config.settings import SessionSettings
from neo_session.features.auth.adapters.memory_user_store import MemoryUserStore
from neo_session.features.auth.factory import create_session_service
from neo_session.features.auth.services.cookie_service import CookieService
from neo_session.features.auth.services.password_hasher import PasswordHasher
from neo_session.features.auth.services.token_service import TokenService

ACCESS_SECRET = "access-secret-for-tests"
REFRESH_SECRET = "refresh-secret-for-tests"

# Lowest scrypt cost the hasher accepts; keeps the suite fast
TEST_HASH_COST = 4


class FrozenClock:
    """Manually advanced UTC clock."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


def make_settings(**overrides) -> SessionSettings:
    values = {
        "access_token_secret": ACCESS_SECRET,
        "refresh_token_secret": REFRESH_SECRET,
        "password_hash_cost": TEST_HASH_COST,
    }
    values.update(overrides)
    return SessionSettings(_env_file=None, **values)


@pytest.fixture
def clock():
    """Clock frozen at a whole second."""
    return FrozenClock(datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def settings():
    """Development settings with test secrets."""
    return make_settings()


@pytest.fixture
def production_settings():
    """Production settings with a cookie domain."""
    return make_settings(environment="production", cookie_domain="example.com")


@pytest.fixture
def password_hasher():
    """Low-cost password hasher."""
    return PasswordHasher(cost=TEST_HASH_COST)


@pytest.fixture
def token_service(clock):
    """Token service with the default lifetimes and a frozen clock."""
    return TokenService(ACCESS_SECRET, REFRESH_SECRET, clock=clock)


@pytest.fixture
def cookie_service():
    """Cookie service."""
    return CookieService()


@pytest.fixture
def user_store():
    """Empty in-memory user store."""
    return MemoryUserStore()


@pytest.fixture
def session_service(user_store, settings, password_hasher, clock):
    """Session service over the in-memory store."""
    return create_session_service(
        user_store,
        settings=settings,
        password_hasher=password_hasher,
        clock=clock,
    )


@pytest.fixture
def production_session_service(user_store, production_settings, password_hasher, clock):
    """Session service configured for production cookies."""
    return create_session_service(
        user_store,
        settings=production_settings,
        password_hasher=password_hasher,
        clock=clock,
    )


@pytest.fixture
def settings_factory():
    """Build settings with test defaults and keyword overrides."""
    return make_settings

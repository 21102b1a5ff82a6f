"""Factory wiring the session service from settings."""

import logging
from datetime import timedelta
from typing import Optional

from ...config.settings import SessionSettings, get_settings
from .entities.protocols import UserStoreProtocol
from .services.cookie_service import CookieService
from .services.password_hasher import PasswordHasher
from .services.session_service import SessionService
from .services.token_service import Clock, TokenService

logger = logging.getLogger(__name__)


def create_session_service(
    user_store: UserStoreProtocol,
    settings: Optional[SessionSettings] = None,
    password_hasher: Optional[PasswordHasher] = None,
    clock: Optional[Clock] = None,
) -> SessionService:
    """Create a session service for the given user store.

    Args:
        user_store: Credential lookup/insert collaborator
        settings: Session settings; loaded from the environment when omitted
        password_hasher: Hasher override; built from ``password_hash_cost`` when omitted
        clock: Clock override for the token service

    Raises:
        ConfigurationError: if the settings are not usable
    """
    settings = settings or get_settings()
    settings.ensure_valid()

    token_service = TokenService(
        access_secret=settings.access_token_secret.get_secret_value(),
        refresh_secret=settings.refresh_token_secret.get_secret_value(),
        access_ttl=timedelta(seconds=settings.access_token_ttl_seconds),
        refresh_ttl=timedelta(seconds=settings.refresh_token_ttl_seconds),
        clock=clock,
    )

    logger.info(f"Creating session service for {settings.environment.value} environment")
    return SessionService(
        user_store=user_store,
        password_hasher=password_hasher or PasswordHasher(cost=settings.password_hash_cost),
        token_service=token_service,
        cookie_service=CookieService(),
        settings=settings,
    )

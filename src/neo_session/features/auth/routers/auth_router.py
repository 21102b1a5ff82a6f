"""Session API router."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from ....core.exceptions import NeoSessionError, create_error_response, get_http_status_code
from ..adapters.starlette_http import StarletteRequestAdapter, StarletteResponseAdapter
from ..dependencies import get_session_service
from ..models.requests import CredentialsRequest
from ..models.responses import (
    AccessTokenResponse,
    MessageResponse,
    SessionStatusResponse,
    SessionTokensResponse,
)
from ..services.session_service import SessionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _to_http_exception(error: NeoSessionError) -> HTTPException:
    return HTTPException(
        status_code=get_http_status_code(error),
        detail=create_error_response(error)["error"],
    )


@router.post(
    "/register",
    response_model=SessionTokensResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    credentials: CredentialsRequest,
    response: Response,
    session_service: SessionService = Depends(get_session_service),
):
    """Register a user and set session cookies."""
    try:
        tokens = await session_service.register(
            credentials.email,
            credentials.password,
            StarletteResponseAdapter(response),
        )
    except NeoSessionError as e:
        raise _to_http_exception(e)
    return SessionTokensResponse.from_tokens(tokens)


@router.post("/login", response_model=SessionTokensResponse)
async def login(
    credentials: CredentialsRequest,
    response: Response,
    session_service: SessionService = Depends(get_session_service),
):
    """Log a user in and set session cookies."""
    try:
        tokens = await session_service.login(
            credentials.email,
            credentials.password,
            StarletteResponseAdapter(response),
        )
    except NeoSessionError as e:
        raise _to_http_exception(e)
    return SessionTokensResponse.from_tokens(tokens)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    session_service: SessionService = Depends(get_session_service),
):
    """Clear session cookies."""
    await session_service.logout(StarletteResponseAdapter(response))
    return MessageResponse(message="Logged out")


@router.get("/session", response_model=SessionStatusResponse)
async def check_session(
    request: Request,
    session_service: SessionService = Depends(get_session_service),
):
    """Report whether the request carries a valid session."""
    session = await session_service.check_session(StarletteRequestAdapter(request))
    return SessionStatusResponse.from_status(session)


@router.post("/refresh", response_model=AccessTokenResponse)
async def refresh(
    request: Request,
    response: Response,
    session_service: SessionService = Depends(get_session_service),
):
    """Issue a new access token from the refresh cookie."""
    try:
        refreshed = await session_service.refresh_session(
            StarletteRequestAdapter(request),
            StarletteResponseAdapter(response),
        )
    except NeoSessionError as e:
        raise _to_http_exception(e)
    return AccessTokenResponse.from_refresh(refreshed)

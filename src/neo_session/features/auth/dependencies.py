"""FastAPI dependencies for session-protected routes."""

import logging

from fastapi import Depends, HTTPException, Request, status

from .adapters.starlette_http import StarletteRequestAdapter
from .services.session_service import SessionService

logger = logging.getLogger(__name__)


def get_session_service() -> SessionService:
    """Get session service - to be overridden by application."""
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Session service not configured"
    )


async def require_user_id(
    request: Request,
    session_service: SessionService = Depends(get_session_service),
) -> str:
    """Resolve the authenticated user id from the access token cookie."""
    session = await session_service.check_session(StarletteRequestAdapter(request))
    if not session.is_valid:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return session.user_id

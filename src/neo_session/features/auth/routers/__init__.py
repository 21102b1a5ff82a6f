"""Session API routers."""

from .auth_router import router

__all__ = ["router"]

"""Auth adapters for user storage and HTTP frameworks."""

from .asyncpg_user_store import AsyncpgUserStore
from .http_messages import CaseInsensitiveHeaders, HeaderRequest, HeaderResponse
from .memory_user_store import MemoryUserStore
from .starlette_http import StarletteRequestAdapter, StarletteResponseAdapter

__all__ = [
    "AsyncpgUserStore",
    "CaseInsensitiveHeaders",
    "HeaderRequest",
    "HeaderResponse",
    "MemoryUserStore",
    "StarletteRequestAdapter",
    "StarletteResponseAdapter",
]

"""Auth feature module - cookie-based session credentials.

This module provides the session credential lifecycle:
- Password hashing with scrypt and constant-time verification
- Access and refresh JWTs signed with independent secrets
- Cookie transport with security attributes
- Register, login, logout, session check and refresh orchestration
- FastAPI router and dependencies

Usage Example:
```python
from fastapi import Depends, FastAPI

from neo_session.features.auth import (
    MemoryUserStore,
    create_session_service,
    get_session_service,
    require_user_id,
    router,
)

session_service = create_session_service(MemoryUserStore())

app = FastAPI()
app.include_router(router)
app.dependency_overrides[get_session_service] = lambda: session_service

@app.get("/me")
async def me(user_id: str = Depends(require_user_id)):
    return {"user_id": user_id}
```
"""

from .adapters import (
    AsyncpgUserStore,
    HeaderRequest,
    HeaderResponse,
    MemoryUserStore,
    StarletteRequestAdapter,
    StarletteResponseAdapter,
)
from .dependencies import get_session_service, require_user_id
from .entities import (
    CookieOptions,
    Credential,
    RefreshedSession,
    RequestProtocol,
    ResponseProtocol,
    SameSite,
    SessionStatus,
    SessionTokens,
    TokenClass,
    TokenPayload,
    UserStoreProtocol,
)
from .factory import create_session_service
from .routers import router
from .services import (
    CookieService,
    PasswordHasher,
    SessionService,
    TokenService,
)

__all__ = [
    # Adapters
    "AsyncpgUserStore",
    "HeaderRequest",
    "HeaderResponse",
    "MemoryUserStore",
    "StarletteRequestAdapter",
    "StarletteResponseAdapter",

    # Entities and protocols
    "CookieOptions",
    "Credential",
    "RefreshedSession",
    "RequestProtocol",
    "ResponseProtocol",
    "SameSite",
    "SessionStatus",
    "SessionTokens",
    "TokenClass",
    "TokenPayload",
    "UserStoreProtocol",

    # Services
    "CookieService",
    "PasswordHasher",
    "SessionService",
    "TokenService",
    "create_session_service",

    # FastAPI
    "router",
    "get_session_service",
    "require_user_id",
]

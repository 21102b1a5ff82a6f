"""Session API response models."""

from typing import Optional

from pydantic import BaseModel, Field

from ..entities.session import RefreshedSession, SessionStatus, SessionTokens


class SessionTokensResponse(BaseModel):
    """Tokens issued by register and login."""

    access_token: str = Field(..., description="Short-lived access token")
    refresh_token: str = Field(..., description="Long-lived refresh token")
    token_type: str = Field("Bearer", description="Token type")

    @classmethod
    def from_tokens(cls, tokens: SessionTokens) -> "SessionTokensResponse":
        return cls(access_token=tokens.access_token, refresh_token=tokens.refresh_token)


class AccessTokenResponse(BaseModel):
    """Access token issued by a refresh."""

    access_token: str = Field(..., description="Short-lived access token")
    token_type: str = Field("Bearer", description="Token type")

    @classmethod
    def from_refresh(cls, refreshed: RefreshedSession) -> "AccessTokenResponse":
        return cls(access_token=refreshed.access_token)


class SessionStatusResponse(BaseModel):
    """Result of a session check."""

    is_valid: bool = Field(..., description="Whether the access token is valid")
    user_id: Optional[str] = Field(None, description="Authenticated user id")

    @classmethod
    def from_status(cls, status: SessionStatus) -> "SessionStatusResponse":
        return cls(is_valid=status.is_valid, user_id=status.user_id)


class MessageResponse(BaseModel):
    """Generic message response."""

    message: str = Field(..., description="Response message")

"""Session API request models."""

from pydantic import BaseModel, Field, field_validator


class CredentialsRequest(BaseModel):
    """Email and password submitted to register or log in."""

    email: str = Field(..., min_length=1, max_length=320, description="User email address")
    password: str = Field(..., min_length=1, max_length=1024, description="Password")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        """Trim the email and reject blank values."""
        if not v or not v.strip():
            raise ValueError("Email cannot be empty")
        return v.strip()

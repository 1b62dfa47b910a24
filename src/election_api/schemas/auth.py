"""Admin authentication schemas."""

from pydantic import BaseModel, Field


class AdminLoginRequest(BaseModel):
    """Admin login with the shared admin password."""

    password: str = Field(min_length=1)


class TokenResponse(BaseModel):
    """Admin JWT response."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Access token expiration in seconds")

"""Authentication API endpoints.

GET /health, POST /auth/login.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger

from election_api.core.config import Settings, get_settings
from election_api.core.security import create_admin_token, verify_admin_password
from election_api.schemas.auth import AdminLoginRequest, TokenResponse
from election_api.schemas.common import HealthResponse

router = APIRouter(tags=["auth"])


@router.get("/health", status_code=200, response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint (no authentication required)."""
    return HealthResponse(status="healthy")


@router.post("/auth/login", response_model=TokenResponse)
async def login(
    request: AdminLoginRequest,
    settings: Annotated[Settings, Depends(get_settings)],
) -> TokenResponse:
    """Exchange the admin password for an admin JWT."""
    if not verify_admin_password(request.password, settings.admin_password):
        logger.warning("Admin login rejected")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    token = create_admin_token(
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expires_minutes=settings.admin_token_expire_minutes,
    )
    return TokenResponse(access_token=token, expires_in=settings.admin_token_expire_minutes * 60)

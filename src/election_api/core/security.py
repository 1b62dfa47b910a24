"""Admin credential handling: password comparison and JWT admin tokens.

Uses PyJWT for token operations. The voting orchestrator only sees a
``credential -> bool`` check, built here from the signing secret; the raw
admin password is only ever exchanged for a token at login.
"""

import hmac
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import jwt
from loguru import logger

ADMIN_ROLE = "admin"


def verify_admin_password(supplied: str | None, configured: str) -> bool:
    """Compare a supplied admin password with the configured one in constant time.

    Args:
        supplied: The password provided by the caller (may be None).
        configured: The configured admin password.

    Returns:
        True if the passwords match, False otherwise.
    """
    if supplied is None:
        return False
    return hmac.compare_digest(supplied.encode(), configured.encode())


def create_admin_token(
    secret_key: str,
    algorithm: str = "HS256",
    expires_minutes: int = 480,
) -> str:
    """Create a JWT carrying the admin role.

    Args:
        secret_key: Secret key for signing.
        algorithm: JWT signing algorithm.
        expires_minutes: Token expiration in minutes.

    Returns:
        The encoded JWT string.
    """
    expire = datetime.now(UTC) + timedelta(minutes=expires_minutes)
    payload = {
        "sub": ADMIN_ROLE,
        "role": ADMIN_ROLE,
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(payload, secret_key, algorithm=algorithm)


def decode_token(
    token: str,
    secret_key: str,
    algorithm: str = "HS256",
) -> dict:
    """Decode and validate a JWT token.

    Raises:
        jwt.ExpiredSignatureError: If the token has expired.
        jwt.InvalidTokenError: If the token is invalid.
    """
    return jwt.decode(token, secret_key, algorithms=[algorithm])


def admin_token_check(secret_key: str, algorithm: str = "HS256") -> Callable[[str | None], bool]:
    """Build a credential check that accepts unexpired admin JWTs."""

    def check(credential: str | None) -> bool:
        if not credential:
            return False
        try:
            payload = decode_token(credential, secret_key, algorithm)
        except jwt.InvalidTokenError as exc:
            logger.debug("Admin token rejected: {}", exc)
            return False
        return payload.get("role") == ADMIN_ROLE

    return check

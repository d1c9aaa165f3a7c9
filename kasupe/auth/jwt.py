"""JWT token creation and verification for access and refresh tokens.

Tokens carry the account id in ``sub`` plus its ``email`` and ``role``; the
role decides which account table the id refers to.
"""

from datetime import datetime, timedelta, timezone

from jose import jwt

from kasupe.config import settings
from kasupe.models.user import ADMIN_ROLE


def _access_lifetime(role: str | None) -> timedelta:
    if role == ADMIN_ROLE:
        return timedelta(minutes=settings.admin_access_token_expire_minutes)
    return timedelta(minutes=settings.customer_access_token_expire_minutes)


def _encode(data: dict, token_type: str, lifetime: timedelta) -> str:
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    to_encode.update({"exp": now + lifetime, "iat": now, "type": token_type})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Create an access token.

    Args:
        data: Payload data. Must include ``sub``; ``role`` selects the default
            lifetime (one day for admins, seven days for customers).
        expires_delta: Custom expiration duration.

    Returns:
        Encoded JWT string.
    """
    return _encode(data, "access", expires_delta or _access_lifetime(data.get("role")))


def create_refresh_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Create a long-lived refresh token.

    Args:
        data: Payload data. Must include ``sub``.
        expires_delta: Custom expiration duration. Defaults to
            ``settings.jwt_refresh_token_expire_days`` days.

    Returns:
        Encoded JWT string.
    """
    return _encode(data, "refresh", expires_delta or timedelta(days=settings.jwt_refresh_token_expire_days))


def decode_token(token: str) -> dict:
    """Decode and verify a JWT token.

    Raises:
        jose.JWTError: If the token is invalid, expired, or malformed.
    """
    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])


def create_token_pair(user_id: str, email: str, role: str) -> dict[str, str]:
    """Create both access and refresh tokens for an account.

    Returns:
        Dictionary with ``access_token``, ``refresh_token``, and ``token_type``.
    """
    payload = {"sub": user_id, "email": email, "role": role}
    return {
        "access_token": create_access_token(payload),
        "refresh_token": create_refresh_token(payload),
        "token_type": "bearer",
    }

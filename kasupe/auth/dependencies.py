"""FastAPI authentication dependencies for route protection."""

import uuid

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kasupe.auth.jwt import decode_token
from kasupe.database import get_db
from kasupe.models.user import ADMIN_ROLE, CUSTOMER_ROLE, AdminUser, Customer

# Strict bearer: rejects requests without a token
_bearer_scheme = HTTPBearer()

# Optional bearer: returns None if no token provided
_bearer_scheme_optional = HTTPBearer(auto_error=False)


def _unauthorized(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _access_claims(token: str) -> tuple[uuid.UUID, str | None]:
    """Verify an access token and return ``(account_id, role)``.

    Raises:
        HTTPException 401: If the token is invalid, expired, of the wrong
            type, or has a malformed subject.
    """
    try:
        payload = decode_token(token)
    except JWTError:
        raise _unauthorized() from None

    # Only accept access tokens, not refresh tokens
    if payload.get("type") != "access":
        raise _unauthorized("Invalid token type")

    sub: str | None = payload.get("sub")
    if sub is None:
        raise _unauthorized()

    try:
        account_id = uuid.UUID(sub)
    except ValueError:
        raise _unauthorized() from None

    return account_id, payload.get("role")


async def get_current_admin(
    credentials: HTTPAuthorizationCredentials = Depends(_bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> AdminUser:
    """Return the admin behind the Bearer token.

    Raises:
        HTTPException 401: If the token is invalid or the admin no longer exists.
        HTTPException 403: If the token belongs to a non-admin account.
    """
    account_id, role = _access_claims(credentials.credentials)

    if role != ADMIN_ROLE:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    result = await db.execute(select(AdminUser).where(AdminUser.id == account_id))
    admin = result.scalar_one_or_none()
    if admin is None:
        raise _unauthorized()
    if admin.role != ADMIN_ROLE:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    return admin


async def get_current_customer(
    credentials: HTTPAuthorizationCredentials = Depends(_bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> Customer:
    """Return the active customer behind the Bearer token.

    Raises:
        HTTPException 401: If the token is invalid, not a customer token, or
            the account is missing or inactive.
    """
    account_id, role = _access_claims(credentials.credentials)

    if role != CUSTOMER_ROLE:
        raise _unauthorized()

    result = await db.execute(select(Customer).where(Customer.id == account_id))
    customer = result.scalar_one_or_none()

    if customer is None:
        raise _unauthorized()
    if not customer.is_active:
        raise _unauthorized("Account is inactive")

    return customer


async def get_optional_customer(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme_optional),
    db: AsyncSession = Depends(get_db),
) -> Customer | None:
    """Optionally authenticate a customer from a Bearer token.

    Returns ``None`` instead of raising when no usable customer token is
    provided. Used by the public booking form, which works for guests too.
    """
    if credentials is None:
        return None

    try:
        account_id, role = _access_claims(credentials.credentials)
    except HTTPException:
        return None

    if role != CUSTOMER_ROLE:
        return None

    result = await db.execute(select(Customer).where(Customer.id == account_id))
    customer = result.scalar_one_or_none()

    if customer is None or not customer.is_active:
        return None

    return customer

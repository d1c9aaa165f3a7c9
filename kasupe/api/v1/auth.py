"""Admin auth API router: login, first-admin bootstrap, token refresh, me."""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from jose import JWTError
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from kasupe.api.deps import get_current_admin, get_db
from kasupe.auth.jwt import create_token_pair, decode_token
from kasupe.auth.passwords import hash_password, verify_password
from kasupe.models.user import ADMIN_ROLE, CUSTOMER_ROLE, AdminUser, Customer
from kasupe.schemas.auth import (
    AdminAuthResponse,
    AdminCreatedResponse,
    AdminCreateRequest,
    AdminResponse,
    LoginRequest,
    RefreshRequest,
    TokenResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


# ---------------------------------------------------------------------------
# POST /login
# ---------------------------------------------------------------------------


@router.post("/login", response_model=AdminAuthResponse)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)) -> AdminAuthResponse:
    """Authenticate an admin with email and password."""
    result = await db.execute(select(AdminUser).where(AdminUser.email == body.email))
    admin = result.scalar_one_or_none()

    if admin is None or not verify_password(body.password, admin.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    tokens = create_token_pair(str(admin.id), admin.email, admin.role)

    return AdminAuthResponse(
        user=AdminResponse.model_validate(admin),
        tokens=TokenResponse(**tokens),
    )


# ---------------------------------------------------------------------------
# POST /seed-admin
# ---------------------------------------------------------------------------


@router.post("/seed-admin", response_model=AdminCreatedResponse, status_code=status.HTTP_201_CREATED)
async def seed_admin(body: AdminCreateRequest, db: AsyncSession = Depends(get_db)) -> AdminCreatedResponse:
    """Create the first admin account.

    Only allowed while no admin exists; further admins are invited by an
    authenticated admin through ``/api/v1/admin/users/invite``.
    """
    admin_count = (await db.execute(select(func.count()).select_from(AdminUser))).scalar_one()
    if admin_count > 0:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Admin already exists",
        )

    admin = AdminUser(
        email=body.email,
        name=body.name,
        hashed_password=hash_password(body.password),
        role=ADMIN_ROLE,
    )
    db.add(admin)
    await db.flush()
    await db.refresh(admin)

    logger.info("Seeded first admin %s", admin.email)
    return AdminCreatedResponse(
        message="Admin user created. You can now login.",
        admin=AdminResponse.model_validate(admin),
    )


# ---------------------------------------------------------------------------
# POST /refresh
# ---------------------------------------------------------------------------


@router.post("/refresh", response_model=TokenResponse)
async def refresh(body: RefreshRequest, db: AsyncSession = Depends(get_db)) -> TokenResponse:
    """Exchange a valid refresh token (admin or customer) for a new token pair."""
    invalid = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired refresh token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = decode_token(body.refresh_token)
    except JWTError:
        raise invalid from None

    if payload.get("type") != "refresh":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        account_id = uuid.UUID(str(payload.get("sub")))
    except ValueError:
        raise invalid from None

    role = payload.get("role")
    if role == ADMIN_ROLE:
        account = (await db.execute(select(AdminUser).where(AdminUser.id == account_id))).scalar_one_or_none()
    elif role == CUSTOMER_ROLE:
        account = (await db.execute(select(Customer).where(Customer.id == account_id))).scalar_one_or_none()
        if account is not None and not account.is_active:
            account = None
    else:
        account = None

    if account is None:
        raise invalid

    return TokenResponse(**create_token_pair(str(account.id), account.email, account.role))


# ---------------------------------------------------------------------------
# GET /me
# ---------------------------------------------------------------------------


@router.get("/me", response_model=AdminResponse)
async def me(admin: AdminUser = Depends(get_current_admin)) -> AdminResponse:
    """Return the authenticated admin's profile."""
    return AdminResponse.model_validate(admin)

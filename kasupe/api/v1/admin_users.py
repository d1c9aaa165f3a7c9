"""Admin account management router: list, change own password, invite, remove."""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kasupe.api.deps import get_current_admin, get_db
from kasupe.auth.passwords import hash_password, verify_password
from kasupe.models.user import ADMIN_ROLE, AdminUser
from kasupe.schemas.auth import (
    AdminCreatedResponse,
    AdminCreateRequest,
    AdminResponse,
    ChangePasswordRequest,
)
from kasupe.schemas.common import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/admin/users", tags=["admin-users"])


@router.get("", response_model=list[AdminResponse], summary="List admin accounts")
async def list_admins(
    db: AsyncSession = Depends(get_db),
    _admin: AdminUser = Depends(get_current_admin),
) -> list[AdminUser]:
    result = await db.execute(select(AdminUser).order_by(AdminUser.created_at))
    return list(result.scalars().all())


@router.put("/me/password", response_model=MessageResponse, summary="Change own password")
async def change_password(
    body: ChangePasswordRequest,
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin),
) -> MessageResponse:
    """Replace the current admin's password after checking the old one."""
    if not verify_password(body.old_password, admin.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Old password is wrong",
        )

    admin.hashed_password = hash_password(body.new_password)
    db.add(admin)
    await db.flush()
    return MessageResponse(message="Password updated successfully")


@router.post(
    "/invite",
    response_model=AdminCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create another admin account",
)
async def invite_admin(
    body: AdminCreateRequest,
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin),
) -> AdminCreatedResponse:
    existing = await db.execute(select(AdminUser).where(AdminUser.email == body.email))
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Admin already exists",
        )

    invited = AdminUser(
        email=body.email,
        name=body.name,
        hashed_password=hash_password(body.password),
        role=ADMIN_ROLE,
    )
    db.add(invited)
    await db.flush()
    await db.refresh(invited)

    logger.info("Admin %s invited %s", admin.email, invited.email)
    return AdminCreatedResponse(
        message="Admin invited/created successfully",
        admin=AdminResponse.model_validate(invited),
    )


@router.delete("/{admin_id}", response_model=MessageResponse, summary="Remove an admin account")
async def delete_admin(
    admin_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin),
) -> MessageResponse:
    """Delete another admin. Admins cannot delete themselves."""
    if admin_id == admin.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot delete yourself",
        )

    result = await db.execute(select(AdminUser).where(AdminUser.id == admin_id))
    target = result.scalar_one_or_none()
    if target is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Admin not found",
        )

    await db.delete(target)
    await db.flush()
    logger.info("Admin %s deleted %s", admin.email, target.email)
    return MessageResponse(message="Admin deleted")

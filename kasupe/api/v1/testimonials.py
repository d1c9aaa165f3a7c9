"""Testimonials API routers.

The public list only shows active testimonials; admins see and edit all.
"""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kasupe.api.deps import get_current_admin, get_db
from kasupe.models.testimonial import Testimonial
from kasupe.schemas.common import MessageResponse
from kasupe.schemas.content import TestimonialCreate, TestimonialResponse, TestimonialUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/testimonials", tags=["testimonials"])
admin_router = APIRouter(
    prefix="/api/v1/admin/testimonials",
    tags=["admin-testimonials"],
    dependencies=[Depends(get_current_admin)],
)


async def _get_testimonial_or_404(testimonial_id: uuid.UUID, db: AsyncSession) -> Testimonial:
    result = await db.execute(select(Testimonial).where(Testimonial.id == testimonial_id))
    testimonial = result.scalar_one_or_none()
    if testimonial is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Testimonial not found",
        )
    return testimonial


@router.get("", response_model=list[TestimonialResponse], summary="List active testimonials")
async def list_testimonials(db: AsyncSession = Depends(get_db)) -> list[Testimonial]:
    result = await db.execute(
        select(Testimonial)
        .where(Testimonial.is_active.is_(True))
        .order_by(Testimonial.created_at.desc())
    )
    return list(result.scalars().all())


@admin_router.get("", response_model=list[TestimonialResponse], summary="List all testimonials")
async def admin_list_testimonials(db: AsyncSession = Depends(get_db)) -> list[Testimonial]:
    result = await db.execute(select(Testimonial).order_by(Testimonial.created_at.desc()))
    return list(result.scalars().all())


@admin_router.post(
    "",
    response_model=TestimonialResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a testimonial",
)
async def create_testimonial(body: TestimonialCreate, db: AsyncSession = Depends(get_db)) -> Testimonial:
    testimonial = Testimonial(**body.model_dump())
    db.add(testimonial)
    await db.flush()
    await db.refresh(testimonial)
    logger.info("Added testimonial %s from %s", testimonial.id, testimonial.name)
    return testimonial


@admin_router.put("/{testimonial_id}", response_model=TestimonialResponse, summary="Update a testimonial")
async def update_testimonial(
    testimonial_id: uuid.UUID,
    body: TestimonialUpdate,
    db: AsyncSession = Depends(get_db),
) -> Testimonial:
    testimonial = await _get_testimonial_or_404(testimonial_id, db)

    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(testimonial, field, value)

    db.add(testimonial)
    await db.flush()
    await db.refresh(testimonial)
    return testimonial


@admin_router.delete("/{testimonial_id}", response_model=MessageResponse, summary="Delete a testimonial")
async def delete_testimonial(testimonial_id: uuid.UUID, db: AsyncSession = Depends(get_db)) -> MessageResponse:
    testimonial = await _get_testimonial_or_404(testimonial_id, db)
    await db.delete(testimonial)
    await db.flush()
    return MessageResponse(message="Testimonial deleted")

"""Newsletter API routers: public subscribe plus admin subscriber management."""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kasupe.api.deps import get_current_admin, get_db
from kasupe.models.subscriber import Subscriber
from kasupe.schemas.common import MessageResponse
from kasupe.schemas.content import SubscribeRequest, SubscribeResponse, SubscriberResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/newsletter", tags=["newsletter"])
admin_router = APIRouter(
    prefix="/api/v1/admin/newsletter",
    tags=["admin-newsletter"],
    dependencies=[Depends(get_current_admin)],
)


@router.post(
    "/subscribe",
    response_model=SubscribeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Subscribe to the newsletter",
)
async def subscribe(
    body: SubscribeRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> SubscribeResponse:
    """Subscribe an email address.

    Returns 201 for a new subscriber and 200 when the address was already
    subscribed or has just been reactivated.
    """
    result = await db.execute(select(Subscriber).where(Subscriber.email == body.email))
    subscriber = result.scalar_one_or_none()

    if subscriber is None:
        subscriber = Subscriber(email=body.email, source=body.source, is_active=True)
        db.add(subscriber)
        await db.flush()
        await db.refresh(subscriber)
        logger.info("New newsletter subscriber %s", subscriber.id)
        message = "Subscribed successfully"
    elif subscriber.is_active:
        response.status_code = status.HTTP_200_OK
        message = "You are already subscribed"
    else:
        subscriber.is_active = True
        db.add(subscriber)
        await db.flush()
        await db.refresh(subscriber)
        response.status_code = status.HTTP_200_OK
        message = "Subscription reactivated"

    return SubscribeResponse(
        message=message,
        subscriber=SubscriberResponse.model_validate(subscriber),
    )


async def _get_subscriber_or_404(subscriber_id: uuid.UUID, db: AsyncSession) -> Subscriber:
    result = await db.execute(select(Subscriber).where(Subscriber.id == subscriber_id))
    subscriber = result.scalar_one_or_none()
    if subscriber is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Subscriber not found",
        )
    return subscriber


@admin_router.get("", response_model=list[SubscriberResponse], summary="List subscribers")
async def list_subscribers(db: AsyncSession = Depends(get_db)) -> list[Subscriber]:
    result = await db.execute(select(Subscriber).order_by(Subscriber.created_at.desc()))
    return list(result.scalars().all())


@admin_router.put("/{subscriber_id}/toggle", response_model=SubscriberResponse, summary="Toggle a subscriber")
async def toggle_subscriber(subscriber_id: uuid.UUID, db: AsyncSession = Depends(get_db)) -> Subscriber:
    subscriber = await _get_subscriber_or_404(subscriber_id, db)
    subscriber.is_active = not subscriber.is_active
    db.add(subscriber)
    await db.flush()
    await db.refresh(subscriber)
    return subscriber


@admin_router.delete("/{subscriber_id}", response_model=MessageResponse, summary="Delete a subscriber")
async def delete_subscriber(subscriber_id: uuid.UUID, db: AsyncSession = Depends(get_db)) -> MessageResponse:
    subscriber = await _get_subscriber_or_404(subscriber_id, db)
    await db.delete(subscriber)
    await db.flush()
    return MessageResponse(message="Subscriber deleted")

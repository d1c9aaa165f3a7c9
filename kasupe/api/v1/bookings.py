"""Bookings API routers.

``router`` is public: anyone can place a booking, and a logged-in customer
can list their own. ``admin_router`` exposes full CRUD to the dashboard.
Every response embeds the booked car (``null`` once the car is deleted).
"""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from kasupe.api.deps import get_current_admin, get_current_customer, get_db, get_optional_customer
from kasupe.bookings.status import normalize_status, stored_spellings
from kasupe.models.booking import Booking
from kasupe.models.car import Car
from kasupe.models.user import Customer
from kasupe.schemas.booking import (
    BookingCreate,
    BookingDetailResponse,
    BookingStatusUpdate,
    BookingUpdate,
)
from kasupe.schemas.common import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/bookings", tags=["bookings"])
admin_router = APIRouter(
    prefix="/api/v1/admin/bookings",
    tags=["admin-bookings"],
    dependencies=[Depends(get_current_admin)],
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _load_booking(db: AsyncSession, booking_id: uuid.UUID) -> Booking:
    """Fetch a booking with its car freshly loaded.

    Raises ``HTTPException 404`` when the booking does not exist.
    """
    result = await db.execute(
        select(Booking).where(Booking.id == booking_id).execution_options(populate_existing=True)
    )
    booking = result.scalar_one_or_none()
    if booking is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found",
        )
    return booking


async def _require_car(db: AsyncSession, car_id: uuid.UUID) -> Car:
    result = await db.execute(select(Car).where(Car.id == car_id))
    car = result.scalar_one_or_none()
    if car is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Car not found",
        )
    return car


async def _create_booking(db: AsyncSession, body: BookingCreate, customer: Customer | None = None) -> Booking:
    """Validate references, fill snapshot fields, and insert the booking."""
    data = body.model_dump()

    if body.car_id is not None:
        car = await _require_car(db, body.car_id)
        # Snapshot keeps the booking displayable after the car is deleted.
        data["car_brand"] = data["car_brand"] or car.brand
        data["car_model"] = data["car_model"] or car.model

    if customer is not None:
        data["customer_name"] = data["customer_name"] or customer.full_name
        data["customer_email"] = data["customer_email"] or customer.email
        data["customer_phone"] = data["customer_phone"] or customer.phone

    if not data["customer_name"]:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="customerName is required",
        )

    booking = Booking(**data)
    db.add(booking)
    await db.flush()
    logger.info("Created booking %s for car %s (%s)", booking.id, booking.car_id, booking.status)
    return await _load_booking(db, booking.id)


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------


@router.post(
    "",
    response_model=BookingDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Place a booking",
)
async def place_booking(
    body: BookingCreate,
    db: AsyncSession = Depends(get_db),
    customer: Customer | None = Depends(get_optional_customer),
) -> Booking:
    """Create a booking from the public site.

    A logged-in customer's name, email and phone fill in any contact details
    left blank on the form.
    """
    return await _create_booking(db, body, customer)


@router.get("/my", response_model=list[BookingDetailResponse], summary="List my bookings")
async def my_bookings(
    db: AsyncSession = Depends(get_db),
    customer: Customer = Depends(get_current_customer),
) -> list[Booking]:
    """Bookings placed under the customer's email address, newest first."""
    result = await db.execute(
        select(Booking)
        .where(func.lower(Booking.customer_email) == customer.email.lower())
        .order_by(Booking.created_at.desc())
    )
    return list(result.scalars().all())


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


@admin_router.get("", response_model=list[BookingDetailResponse], summary="List bookings")
async def list_bookings(
    status_filter: str | None = Query(None, alias="status", description="Filter by status (case-insensitive)"),
    db: AsyncSession = Depends(get_db),
) -> list[Booking]:
    """Return all bookings, newest first.

    An unrecognised ``status`` value is ignored rather than rejected.
    """
    query = select(Booking)

    booking_status = normalize_status(status_filter)
    if booking_status is not None:
        query = query.where(func.lower(Booking.status).in_(stored_spellings(booking_status)))

    result = await db.execute(query.order_by(Booking.created_at.desc()))
    return list(result.scalars().all())


@admin_router.get("/{booking_id}", response_model=BookingDetailResponse, summary="Get a booking")
async def get_booking(booking_id: uuid.UUID, db: AsyncSession = Depends(get_db)) -> Booking:
    return await _load_booking(db, booking_id)


@admin_router.post(
    "",
    response_model=BookingDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a booking",
)
async def create_booking(body: BookingCreate, db: AsyncSession = Depends(get_db)) -> Booking:
    return await _create_booking(db, body)


@admin_router.put("/{booking_id}/status", response_model=BookingDetailResponse, summary="Change booking status")
async def update_booking_status(
    booking_id: uuid.UUID,
    body: BookingStatusUpdate,
    db: AsyncSession = Depends(get_db),
) -> Booking:
    booking = await _load_booking(db, booking_id)
    booking.status = body.status
    db.add(booking)
    await db.flush()
    logger.info("Booking %s is now %s", booking_id, body.status)
    return await _load_booking(db, booking_id)


@admin_router.put("/{booking_id}", response_model=BookingDetailResponse, summary="Update a booking")
async def update_booking(
    booking_id: uuid.UUID,
    body: BookingUpdate,
    db: AsyncSession = Depends(get_db),
) -> Booking:
    """Partially update a booking. A new ``carId`` must name an existing car."""
    booking = await _load_booking(db, booking_id)

    update_data = body.model_dump(exclude_unset=True)
    if update_data.get("car_id") is not None and update_data["car_id"] != booking.car_id:
        await _require_car(db, update_data["car_id"])

    for field, value in update_data.items():
        setattr(booking, field, value)

    db.add(booking)
    await db.flush()
    return await _load_booking(db, booking_id)


@admin_router.delete("/{booking_id}", response_model=MessageResponse, summary="Delete a booking")
async def delete_booking(booking_id: uuid.UUID, db: AsyncSession = Depends(get_db)) -> MessageResponse:
    booking = await _load_booking(db, booking_id)
    await db.delete(booking)
    await db.flush()
    return MessageResponse(message="Booking deleted")

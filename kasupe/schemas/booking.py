"""Pydantic v2 request/response schemas for booking endpoints."""

import uuid

from pydantic import ConfigDict, Field, field_validator

from kasupe.bookings.status import BookingStatus, normalize_status
from kasupe.schemas.car import CarResponse
from kasupe.schemas.common import CamelModel, UTCDatetime


def _coerce_status(value: object) -> object:
    """Normalize a status string; unknown values fail validation."""
    if value is None or not isinstance(value, str):
        return value
    status = normalize_status(value)
    if status is None:
        allowed = ", ".join(s.value for s in BookingStatus)
        raise ValueError(f"Invalid status value; allowed: {allowed}")
    return status


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class BookingCreate(CamelModel):
    """Schema for creating a booking.

    ``customerName`` may be omitted only when a logged-in customer books.
    ``returnDate`` is expected to be on or after ``pickupDate`` but is not
    enforced.
    """

    car_id: uuid.UUID | None = None
    car_brand: str | None = Field(None, max_length=100)
    car_model: str | None = Field(None, max_length=100)
    car_plate: str | None = Field(None, max_length=50)
    customer_name: str | None = Field(None, min_length=1, max_length=255)
    customer_email: str | None = Field(None, max_length=255)
    customer_phone: str | None = Field(None, max_length=50)
    pickup_date: UTCDatetime
    return_date: UTCDatetime
    status: BookingStatus = BookingStatus.PENDING.value
    total_price: float | None = Field(None, ge=0)
    notes: str | None = None

    model_config = ConfigDict(use_enum_values=True)

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: object) -> object:
        return _coerce_status(value)


class BookingUpdate(CamelModel):
    """Schema for partially updating a booking. All fields optional."""

    car_id: uuid.UUID | None = None
    car_brand: str | None = Field(None, max_length=100)
    car_model: str | None = Field(None, max_length=100)
    car_plate: str | None = Field(None, max_length=50)
    customer_name: str | None = Field(None, min_length=1, max_length=255)
    customer_email: str | None = Field(None, max_length=255)
    customer_phone: str | None = Field(None, max_length=50)
    pickup_date: UTCDatetime | None = None
    return_date: UTCDatetime | None = None
    status: BookingStatus | None = None
    total_price: float | None = Field(None, ge=0)
    notes: str | None = None

    model_config = ConfigDict(use_enum_values=True)

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: object) -> object:
        return _coerce_status(value)


class BookingStatusUpdate(CamelModel):
    """Body of ``PUT /bookings/{id}/status``."""

    status: BookingStatus

    model_config = ConfigDict(use_enum_values=True)

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: object) -> object:
        return _coerce_status(value)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BookingResponse(CamelModel):
    """Booking record as stored."""

    id: uuid.UUID
    car_id: uuid.UUID | None = None
    car_brand: str | None = None
    car_model: str | None = None
    car_plate: str | None = None
    customer_name: str
    customer_email: str | None = None
    customer_phone: str | None = None
    pickup_date: UTCDatetime
    return_date: UTCDatetime
    status: str
    total_price: float | None = None
    notes: str | None = None
    created_at: UTCDatetime
    updated_at: UTCDatetime

    model_config = ConfigDict(from_attributes=True)


class BookingDetailResponse(BookingResponse):
    """Booking with its car attached (``null`` once the car was deleted)."""

    car: CarResponse | None = None

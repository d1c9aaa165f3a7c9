"""Booking model: car reservations."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kasupe.bookings.status import BookingStatus
from kasupe.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Booking(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A reservation of a car for a customer between two dates.

    ``car_id`` is a weak reference without a foreign-key constraint: deleting
    a car leaves its bookings (and their revenue) in place, and the
    ``car_brand``/``car_model``/``car_plate`` snapshot keeps them displayable.
    """

    __tablename__ = "bookings"

    car_id: Mapped[uuid.UUID | None] = mapped_column(nullable=True, index=True)

    car_brand: Mapped[str | None] = mapped_column(String(100), nullable=True)
    car_model: Mapped[str | None] = mapped_column(String(100), nullable=True)
    car_plate: Mapped[str | None] = mapped_column(String(50), nullable=True)

    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_email: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    customer_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)

    pickup_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    return_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    status: Mapped[str] = mapped_column(
        String(50),
        default=BookingStatus.PENDING.value,
        nullable=False,
        index=True,
    )  # Pending, Confirmed, Completed, Cancelled
    total_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    price: Mapped[float | None] = mapped_column(Float, nullable=True)  # legacy, read-only fallback for total_price
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Resolves to None once the car is deleted.
    car: Mapped["Car"] = relationship(  # type: ignore[name-defined]  # noqa: F821
        "Car",
        primaryjoin="foreign(Booking.car_id) == Car.id",
        viewonly=True,
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, car_id={self.car_id}, status={self.status})>"

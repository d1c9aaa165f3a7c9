"""Car model: the rental fleet."""

from sqlalchemy import Boolean, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from kasupe.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Car(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A rentable vehicle listed on the public site."""

    __tablename__ = "cars"

    brand: Mapped[str] = mapped_column(String(100), nullable=False)
    model: Mapped[str] = mapped_column(String(100), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)  # Sedan, SUV, ...
    transmission: Mapped[str] = mapped_column(String(50), nullable=False)
    fuel_type: Mapped[str] = mapped_column(String(50), nullable=False)  # Petrol, Diesel, ...
    seating_capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    location: Mapped[str] = mapped_column(String(100), nullable=False)  # Lusaka, Chipata, ...
    price_per_day: Mapped[float] = mapped_column(Float, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image: Mapped[str] = mapped_column(String(512), default="", nullable=False)
    is_available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Car(id={self.id}, brand={self.brand!r}, model={self.model!r})>"

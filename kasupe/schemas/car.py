"""Pydantic v2 request/response schemas for car endpoints."""

import uuid

from pydantic import ConfigDict, Field

from kasupe.schemas.common import CamelModel, UTCDatetime

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CarCreate(CamelModel):
    """Schema for adding a car to the fleet."""

    brand: str = Field(..., min_length=1, max_length=100)
    model: str = Field(..., min_length=1, max_length=100)
    year: int = Field(..., ge=1900, le=2100)
    category: str = Field(..., min_length=1, max_length=50)
    transmission: str = Field(..., min_length=1, max_length=50)
    fuel_type: str = Field(..., min_length=1, max_length=50)
    seating_capacity: int = Field(..., ge=1, le=100)
    location: str = Field(..., min_length=1, max_length=100)
    price_per_day: float = Field(..., ge=0)
    description: str | None = None
    image: str = Field("", max_length=512)
    is_available: bool = True


class CarUpdate(CamelModel):
    """Schema for partially updating a car. All fields optional."""

    brand: str | None = Field(None, min_length=1, max_length=100)
    model: str | None = Field(None, min_length=1, max_length=100)
    year: int | None = Field(None, ge=1900, le=2100)
    category: str | None = Field(None, min_length=1, max_length=50)
    transmission: str | None = Field(None, min_length=1, max_length=50)
    fuel_type: str | None = Field(None, min_length=1, max_length=50)
    seating_capacity: int | None = Field(None, ge=1, le=100)
    location: str | None = Field(None, min_length=1, max_length=100)
    price_per_day: float | None = Field(None, ge=0)
    description: str | None = None
    image: str | None = Field(None, max_length=512)
    is_available: bool | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class CarResponse(CamelModel):
    """Full car record."""

    id: uuid.UUID
    brand: str
    model: str
    year: int
    category: str
    transmission: str
    fuel_type: str
    seating_capacity: int
    location: str
    price_per_day: float
    description: str | None = None
    image: str = ""
    is_available: bool
    created_at: UTCDatetime
    updated_at: UTCDatetime

    model_config = ConfigDict(from_attributes=True)

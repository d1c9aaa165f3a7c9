"""Cars API routers.

``router`` serves the public catalogue; ``admin_router`` lets the dashboard
manage the fleet. Deleting a car leaves its bookings untouched.
"""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kasupe.api.deps import get_current_admin, get_db
from kasupe.models.car import Car
from kasupe.schemas.car import CarCreate, CarResponse, CarUpdate
from kasupe.schemas.common import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/cars", tags=["cars"])
admin_router = APIRouter(
    prefix="/api/v1/admin/cars",
    tags=["admin-cars"],
    dependencies=[Depends(get_current_admin)],
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _get_car_or_404(car_id: uuid.UUID, db: AsyncSession) -> Car:
    result = await db.execute(select(Car).where(Car.id == car_id))
    car = result.scalar_one_or_none()
    if car is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Car not found",
        )
    return car


async def _list_cars(db: AsyncSession, only_available: bool) -> list[Car]:
    query = select(Car)
    if only_available:
        query = query.where(Car.is_available.is_(True))
    result = await db.execute(query.order_by(Car.created_at.desc()))
    return list(result.scalars().all())


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------


@router.get("", response_model=list[CarResponse], summary="List cars")
async def list_cars(
    only_available: bool = Query(False, alias="onlyAvailable", description="Only cars open for booking"),
    db: AsyncSession = Depends(get_db),
) -> list[Car]:
    """Return the fleet, newest first."""
    return await _list_cars(db, only_available)


@router.get("/{car_id}", response_model=CarResponse, summary="Get a car by ID")
async def get_car(car_id: uuid.UUID, db: AsyncSession = Depends(get_db)) -> Car:
    return await _get_car_or_404(car_id, db)


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


@admin_router.get("", response_model=list[CarResponse], summary="List cars (admin)")
async def admin_list_cars(
    only_available: bool = Query(False, alias="onlyAvailable"),
    db: AsyncSession = Depends(get_db),
) -> list[Car]:
    return await _list_cars(db, only_available)


@admin_router.get("/{car_id}", response_model=CarResponse, summary="Get a car (admin)")
async def admin_get_car(car_id: uuid.UUID, db: AsyncSession = Depends(get_db)) -> Car:
    return await _get_car_or_404(car_id, db)


@admin_router.post(
    "",
    response_model=CarResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a car",
)
async def create_car(body: CarCreate, db: AsyncSession = Depends(get_db)) -> Car:
    car = Car(**body.model_dump())
    db.add(car)
    await db.flush()
    await db.refresh(car)
    logger.info("Created car %s (%s %s)", car.id, car.brand, car.model)
    return car


@admin_router.put("/{car_id}", response_model=CarResponse, summary="Update a car")
async def update_car(
    car_id: uuid.UUID,
    body: CarUpdate,
    db: AsyncSession = Depends(get_db),
) -> Car:
    """Partially update a car. Only explicitly set fields are changed."""
    car = await _get_car_or_404(car_id, db)

    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(car, field, value)

    db.add(car)
    await db.flush()
    await db.refresh(car)
    return car


@admin_router.delete("/{car_id}", response_model=MessageResponse, summary="Delete a car")
async def delete_car(car_id: uuid.UUID, db: AsyncSession = Depends(get_db)) -> MessageResponse:
    car = await _get_car_or_404(car_id, db)
    await db.delete(car)
    await db.flush()
    logger.info("Deleted car %s", car_id)
    return MessageResponse(message="Car deleted")

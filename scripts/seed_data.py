"""Seed the database with a demo admin, a Zambian rental fleet and bookings.

Creates missing tables first, then wipes and re-creates the demo data, so it
is safe to run repeatedly against a development database.

Run from the project root:
    python -m scripts.seed_data
"""

import asyncio
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add project root to path so imports work when run as a script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import delete, select

from kasupe.auth.passwords import hash_password
from kasupe.bookings.status import BookingStatus
from kasupe.database import async_session_factory, engine, init_models
from kasupe.models.booking import Booking
from kasupe.models.car import Car
from kasupe.models.user import ADMIN_ROLE, AdminUser

# ---------------------------------------------------------------------------
# Seed data definitions
# ---------------------------------------------------------------------------

DEMO_ADMIN = {
    "email": "admin@kasupe.co.zm",
    "password": "kasupe-admin-1234",
    "name": "Kasupe Admin",
}

CARS = [
    {
        "brand": "Toyota",
        "model": "Land Cruiser Prado",
        "year": 2021,
        "category": "SUV",
        "transmission": "Automatic",
        "fuel_type": "Diesel",
        "seating_capacity": 7,
        "location": "Lusaka",
        "price_per_day": 1800.0,
        "description": "Comfortable 4x4 for long trips to the national parks.",
    },
    {
        "brand": "Toyota",
        "model": "Corolla",
        "year": 2019,
        "category": "Sedan",
        "transmission": "Automatic",
        "fuel_type": "Petrol",
        "seating_capacity": 5,
        "location": "Lusaka",
        "price_per_day": 650.0,
        "description": "Economical city car, ideal for business travel.",
    },
    {
        "brand": "Nissan",
        "model": "Navara",
        "year": 2020,
        "category": "Pickup",
        "transmission": "Manual",
        "fuel_type": "Diesel",
        "seating_capacity": 5,
        "location": "Chipata",
        "price_per_day": 1200.0,
        "description": "Double cab pickup for rough roads and cargo.",
    },
    {
        "brand": "Honda",
        "model": "Fit",
        "year": 2018,
        "category": "Hatchback",
        "transmission": "Automatic",
        "fuel_type": "Petrol",
        "seating_capacity": 5,
        "location": "Livingstone",
        "price_per_day": 450.0,
        "description": "Compact and easy to park around town.",
    },
]

CUSTOMERS = [
    ("Mwila Banda", "mwila.banda@example.com", "+260 977 123 456"),
    ("Chanda Phiri", "chanda.phiri@example.com", "+260 966 234 567"),
    ("Natasha Mulenga", "natasha.mulenga@example.com", "+260 955 345 678"),
    ("Joseph Tembo", "joseph.tembo@example.com", "+260 978 456 789"),
]

PAYMENT_NOTES = [
    "Paid via MTN Mobile Money",
    "Airtel Money deposit received",
    "Card payment at the counter",
    None,
]


def _build_bookings(cars: list[Car], now: datetime) -> list[dict]:
    """Spread bookings over the last year with a mix of statuses."""
    statuses = [
        BookingStatus.COMPLETED,
        BookingStatus.CONFIRMED,
        BookingStatus.PENDING,
        BookingStatus.COMPLETED,
        BookingStatus.CANCELLED,
    ]
    bookings = []
    for i in range(24):
        car = cars[i % len(cars)]
        name, email, phone = CUSTOMERS[i % len(CUSTOMERS)]
        days = 1 + (i % 5)
        pickup = now - timedelta(days=(i * 15) % 360, hours=i)
        bookings.append(
            {
                "car": car,
                "customer_name": name,
                "customer_email": email,
                "customer_phone": phone,
                "pickup_date": pickup,
                "return_date": pickup + timedelta(days=days - 1),
                "status": statuses[i % len(statuses)].value,
                "total_price": car.price_per_day * days,
                "notes": PAYMENT_NOTES[i % len(PAYMENT_NOTES)],
            }
        )
    return bookings


async def seed() -> None:
    """Populate the database with demo data.

    Idempotent: removes the demo admin and all cars and bookings before
    re-seeding them.
    """
    await init_models()

    async with async_session_factory() as session:
        await session.execute(delete(Booking))
        await session.execute(delete(Car))
        await session.execute(delete(AdminUser).where(AdminUser.email == DEMO_ADMIN["email"]))
        await session.flush()

        # ------------------------------------------------------------------
        # 1. Demo admin
        # ------------------------------------------------------------------
        admin = AdminUser(
            email=DEMO_ADMIN["email"],
            name=DEMO_ADMIN["name"],
            hashed_password=hash_password(DEMO_ADMIN["password"]),
            role=ADMIN_ROLE,
        )
        session.add(admin)
        await session.flush()
        print(f"Created admin: {admin.email}")

        # ------------------------------------------------------------------
        # 2. Fleet
        # ------------------------------------------------------------------
        created_cars: list[Car] = []
        for car_data in CARS:
            car = Car(**car_data)
            session.add(car)
            created_cars.append(car)
        await session.flush()
        for car in created_cars:
            print(f"   {car.brand} {car.model} ({car.location}) K{car.price_per_day:.0f}/day")

        # ------------------------------------------------------------------
        # 3. Bookings
        # ------------------------------------------------------------------
        now = datetime.now(timezone.utc)
        for bdata in _build_bookings(created_cars, now):
            car = bdata.pop("car")
            session.add(Booking(car_id=car.id, car_brand=car.brand, car_model=car.model, **bdata))

        await session.commit()

        booking_count = len((await session.execute(select(Booking.id))).all())
        print()
        print("=" * 60)
        print("Seed Summary")
        print("=" * 60)
        print(f"   Admin:    {DEMO_ADMIN['email']} / {DEMO_ADMIN['password']}")
        print(f"   Cars:     {len(created_cars)}")
        print(f"   Bookings: {booking_count}")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())

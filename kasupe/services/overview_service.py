"""Admin overview analytics: dashboard KPIs derived from booking records.

:func:`build_overview` is a pure reducer over a snapshot of every car and
booking plus the current instant. :func:`load_overview_dataset` reads that
snapshot from the database. Nothing here writes.
"""

import logging
import re
import uuid
from collections import Counter
from collections.abc import Callable, Hashable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kasupe.bookings.status import ACTIVE_STATUSES, REVENUE_STATUSES, BookingStatus, normalize_status
from kasupe.models.booking import Booking
from kasupe.models.car import Car
from kasupe.schemas.booking import BookingDetailResponse, BookingResponse
from kasupe.schemas.car import CarResponse
from kasupe.schemas.overview import AdminOverviewResponse, PaymentSplit, SeriesPoint, TopCar

logger = logging.getLogger(__name__)

TOP_CARS_LIMIT = 5
RECENT_BOOKINGS_LIMIT = 5
DAILY_WINDOW_DAYS = 7
WEEKLY_WINDOW_WEEKS = 8
MONTHLY_WINDOW_MONTHS = 12
YEARLY_WINDOW_YEARS = 5

# Checked in order; the first pattern found in the notes wins.
PAYMENT_PATTERNS = (
    ("mtn", re.compile(r"mtn", re.IGNORECASE)),
    ("airtel", re.compile(r"airtel", re.IGNORECASE)),
    ("card", re.compile(r"card|credit|debit", re.IGNORECASE)),
)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Fixed English labels; strftime("%b") follows the process locale.
MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass
class _Totals:
    revenue: float = 0.0
    bookings: int = 0

    def add(self, booking: Booking) -> None:
        self.revenue += booking_revenue(booking)
        self.bookings += 1


# ---------------------------------------------------------------------------
# Per-booking helpers
# ---------------------------------------------------------------------------


def as_utc(value: datetime | None) -> datetime | None:
    """Treat naive datetimes (as returned by SQLite) as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def booking_revenue(booking: Booking) -> float:
    """Revenue value of a booking: total price, else legacy price, else 0."""
    if booking.total_price is not None:
        return float(booking.total_price)
    if booking.price is not None:
        return float(booking.price)
    return 0.0


def classify_payment_method(notes: str | None) -> str:
    """Infer the payment method from free-text booking notes.

    Returns one of ``mtn``, ``airtel``, ``card`` or ``unknown``.
    """
    text = notes or ""
    for method, pattern in PAYMENT_PATTERNS:
        if pattern.search(text):
            return method
    return "unknown"


def booking_length_days(booking: Booking) -> int | None:
    """Inclusive number of calendar days (UTC) a booking spans.

    A same-day rental is 1 day; 2025-01-01 to 2025-01-03 is 3 days.
    """
    pickup = as_utc(booking.pickup_date)
    returned = as_utc(booking.return_date)
    if pickup is None or returned is None:
        return None
    return (returned.date() - pickup.date()).days + 1


def is_active_at(booking: Booking, now: datetime) -> bool:
    """True when a confirmed booking's rental interval contains ``now``."""
    if normalize_status(booking.status) not in ACTIVE_STATUSES:
        return False
    pickup = as_utc(booking.pickup_date)
    returned = as_utc(booking.return_date)
    if pickup is None or returned is None:
        return False
    return pickup <= now <= returned


def _percentage(part: int, whole: int) -> float:
    return part / whole * 100 if whole > 0 else 0.0


# ---------------------------------------------------------------------------
# Time series
# ---------------------------------------------------------------------------


def _start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def _months_back(day: date, months: int) -> date:
    index = day.year * 12 + (day.month - 1) - months
    return date(index // 12, index % 12 + 1, 1)


def _bucket_totals(
    bookings: Sequence[Booking],
    start: datetime,
    now: datetime,
    key: Callable[[datetime], Hashable],
) -> dict:
    """Sum revenue-eligible bookings picked up in ``[start, now]`` per bucket key."""
    totals: dict = {}
    for booking in bookings:
        if normalize_status(booking.status) not in REVENUE_STATUSES:
            continue
        pickup = as_utc(booking.pickup_date)
        if pickup is None or not start <= pickup <= now:
            continue
        totals.setdefault(key(pickup), _Totals()).add(booking)
    return totals


def daily_series(bookings: Sequence[Booking], now: datetime) -> list[SeriesPoint]:
    """Revenue per day for the 7 days ending today, with empty days filled in."""
    today = now.date()
    days = [today - timedelta(days=offset) for offset in range(DAILY_WINDOW_DAYS - 1, -1, -1)]
    totals = _bucket_totals(bookings, _start_of_day(days[0]), now, lambda pickup: pickup.date())

    points = []
    for day in days:
        bucket = totals.get(day, _Totals())
        points.append(
            SeriesPoint(
                period=day.isoformat(),
                label=f"{day.day:02d} {MONTH_ABBREVIATIONS[day.month - 1]}",
                revenue=bucket.revenue,
                bookings=bucket.bookings,
            )
        )
    return points


def weekly_series(bookings: Sequence[Booking], now: datetime) -> list[SeriesPoint]:
    """Revenue per ISO week over the last 8 weeks. Weeks without data are absent."""
    today = now.date()
    current_week = today - timedelta(days=today.weekday())
    first_week = current_week - timedelta(weeks=WEEKLY_WINDOW_WEEKS - 1)
    totals = _bucket_totals(
        bookings,
        _start_of_day(first_week),
        now,
        lambda pickup: (pickup.isocalendar()[0], pickup.isocalendar()[1]),
    )

    return [
        SeriesPoint(
            period=f"{year}-W{week:02d}",
            label=f"W{week}",
            revenue=totals[(year, week)].revenue,
            bookings=totals[(year, week)].bookings,
        )
        for year, week in sorted(totals)[-WEEKLY_WINDOW_WEEKS:]
    ]


def monthly_series(bookings: Sequence[Booking], now: datetime) -> list[SeriesPoint]:
    """Revenue per calendar month over the last 12 months. Sparse."""
    first_month = _months_back(now.date(), MONTHLY_WINDOW_MONTHS - 1)
    totals = _bucket_totals(
        bookings,
        _start_of_day(first_month),
        now,
        lambda pickup: (pickup.year, pickup.month),
    )

    points = []
    for year, month in sorted(totals)[-MONTHLY_WINDOW_MONTHS:]:
        bucket = totals[(year, month)]
        points.append(
            SeriesPoint(
                period=f"{year}-{month:02d}",
                label=f"{MONTH_ABBREVIATIONS[month - 1]} {year % 100:02d}",
                revenue=bucket.revenue,
                bookings=bucket.bookings,
            )
        )
    return points


def yearly_series(bookings: Sequence[Booking], now: datetime) -> list[SeriesPoint]:
    """Revenue per calendar year over the last 5 years. Sparse."""
    first_year = date(now.year - (YEARLY_WINDOW_YEARS - 1), 1, 1)
    totals = _bucket_totals(bookings, _start_of_day(first_year), now, lambda pickup: pickup.year)

    return [
        SeriesPoint(
            period=str(year),
            label=str(year),
            revenue=totals[year].revenue,
            bookings=totals[year].bookings,
        )
        for year in sorted(totals)[-YEARLY_WINDOW_YEARS:]
    ]


# ---------------------------------------------------------------------------
# Rankings
# ---------------------------------------------------------------------------


def top_cars(bookings: Sequence[Booking], cars_by_id: Mapping[uuid.UUID, Car]) -> list[TopCar]:
    """The most-booked cars, with revenue summed over all their bookings.

    Ties keep the order in which the cars first appear in ``bookings``.
    Bookings whose car was deleted still count; the entry just has no
    display fields.
    """
    totals: dict[uuid.UUID, _Totals] = {}
    for booking in bookings:
        if booking.car_id is None:
            continue
        totals.setdefault(booking.car_id, _Totals()).add(booking)

    ranked = sorted(totals.items(), key=lambda item: item[1].bookings, reverse=True)

    entries = []
    for car_id, bucket in ranked[:TOP_CARS_LIMIT]:
        car = cars_by_id.get(car_id)
        entries.append(
            TopCar(
                car_id=str(car_id),
                bookings=bucket.bookings,
                revenue=bucket.revenue,
                brand=car.brand if car else None,
                model=car.model if car else None,
                image=car.image if car else None,
                location=car.location if car else None,
            )
        )
    return entries


def recent_bookings(
    bookings: Sequence[Booking],
    cars_by_id: Mapping[uuid.UUID, Car],
) -> list[BookingDetailResponse]:
    """The most recently created bookings with their car attached, if it still exists."""
    newest = sorted(bookings, key=lambda b: as_utc(b.created_at) or _EPOCH, reverse=True)

    results = []
    for booking in newest[:RECENT_BOOKINGS_LIMIT]:
        car = cars_by_id.get(booking.car_id) if booking.car_id is not None else None
        record = BookingResponse.model_validate(booking).model_dump()
        results.append(
            BookingDetailResponse(
                **record,
                car=CarResponse.model_validate(car) if car is not None else None,
            )
        )
    return results


def payment_split(bookings: Sequence[Booking]) -> PaymentSplit:
    counts = Counter(classify_payment_method(booking.notes) for booking in bookings)
    return PaymentSplit(**counts)


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------


def build_overview(
    cars: Sequence[Car],
    bookings: Sequence[Booking],
    now: datetime,
) -> AdminOverviewResponse:
    """Compute the admin dashboard snapshot.

    Args:
        cars: Every car record.
        bookings: Every booking record, oldest first. The order only matters
            for breaking ties between equally booked cars.
        now: The instant the snapshot describes.
    """
    now = as_utc(now)
    cars_by_id = {car.id: car for car in cars}

    statuses = [normalize_status(booking.status) for booking in bookings]
    total_cars = len(cars)
    total_bookings = len(bookings)
    cancelled = statuses.count(BookingStatus.CANCELLED)
    active = sum(1 for booking in bookings if is_active_at(booking, now))

    lengths = [days for days in (booking_length_days(b) for b in bookings) if days is not None]
    avg_length = sum(lengths) / len(lengths) if lengths else 0.0

    daily = daily_series(bookings, now)

    return AdminOverviewResponse(
        total_cars=total_cars,
        total_bookings=total_bookings,
        pending_bookings=statuses.count(BookingStatus.PENDING),
        completed_bookings=statuses.count(BookingStatus.COMPLETED),
        cancelled_bookings=cancelled,
        # Trailing 7-day revenue; the dashboard labels it "monthly".
        monthly_revenue=sum(point.revenue for point in daily),
        active_bookings=active,
        utilization_rate=_percentage(active, total_cars),
        avg_booking_length=avg_length,
        cancellation_rate=_percentage(cancelled, total_bookings),
        top_cars=top_cars(bookings, cars_by_id),
        payment_split=payment_split(bookings),
        daily_series=daily,
        weekly_series=weekly_series(bookings, now),
        monthly_series=monthly_series(bookings, now),
        yearly_series=yearly_series(bookings, now),
        recent_bookings=recent_bookings(bookings, cars_by_id),
    )


async def load_overview_dataset(db: AsyncSession) -> tuple[list[Car], list[Booking]]:
    """Read every car and every booking (oldest first) for :func:`build_overview`."""
    cars_result = await db.execute(select(Car))
    bookings_result = await db.execute(select(Booking).order_by(Booking.created_at, Booking.id))
    cars = list(cars_result.scalars().all())
    bookings = list(bookings_result.scalars().all())
    logger.debug("Loaded %d cars and %d bookings for overview", len(cars), len(bookings))
    return cars, bookings

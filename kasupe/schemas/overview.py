"""Pydantic v2 schemas for the admin overview dashboard."""

from pydantic import model_serializer

from kasupe.schemas.booking import BookingDetailResponse
from kasupe.schemas.common import CamelModel


class SeriesPoint(CamelModel):
    """One bucket of a revenue time series."""

    period: str  # sortable key: 2025-01-05, 2025-W02, 2025-01, 2025
    label: str  # short display label: 05 Jan, W2, Jan 25, 2025
    revenue: float
    bookings: int


class TopCar(CamelModel):
    """A most-booked car with its booking count and summed revenue.

    Display fields are omitted from the JSON when the car no longer exists.
    """

    car_id: str
    bookings: int
    revenue: float
    brand: str | None = None
    model: str | None = None
    image: str | None = None
    location: str | None = None

    @model_serializer(mode="wrap")
    def _omit_missing_car_fields(self, handler):
        data = handler(self)
        return {key: value for key, value in data.items() if value is not None}


class PaymentSplit(CamelModel):
    mtn: int = 0
    airtel: int = 0
    card: int = 0
    unknown: int = 0


class AdminOverviewResponse(CamelModel):
    """Dashboard snapshot returned by ``GET /api/v1/admin/overview``."""

    total_cars: int
    total_bookings: int
    pending_bookings: int
    completed_bookings: int
    cancelled_bookings: int
    monthly_revenue: float

    active_bookings: int
    utilization_rate: float
    avg_booking_length: float
    cancellation_rate: float
    top_cars: list[TopCar]
    payment_split: PaymentSplit

    daily_series: list[SeriesPoint]
    weekly_series: list[SeriesPoint]
    monthly_series: list[SeriesPoint]
    yearly_series: list[SeriesPoint]

    recent_bookings: list[BookingDetailResponse]

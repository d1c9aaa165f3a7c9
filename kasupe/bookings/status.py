"""Booking status vocabulary and normalization.

Every place that compares statuses (query filters, the admin overview
aggregation, request validation) goes through :func:`normalize_status`, so
legacy rows stored as ``"confirmed"`` or ``"ACTIVE"`` are treated the same as
``"Confirmed"``.
"""

from enum import Enum


class BookingStatus(str, Enum):
    """The closed set of persisted booking statuses."""

    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


# Informal spellings accepted on input and found in older rows.
STATUS_ALIASES: dict[str, BookingStatus] = {
    "active": BookingStatus.CONFIRMED,
}

# Statuses whose bookings are "on the road" for utilization purposes.
ACTIVE_STATUSES = frozenset({BookingStatus.CONFIRMED})

# Statuses whose bookings count toward revenue.
REVENUE_STATUSES = frozenset({BookingStatus.CONFIRMED, BookingStatus.COMPLETED})

_BY_LOWER = {status.value.lower(): status for status in BookingStatus}


def normalize_status(value: str | None) -> BookingStatus | None:
    """Map a free-form status string onto :class:`BookingStatus`.

    Matching is case-insensitive and exact: ``"pending"`` and ``"PENDING"``
    match, ``" pending"`` does not. Returns ``None`` for unknown values.
    """
    if value is None:
        return None
    if isinstance(value, BookingStatus):
        return value
    key = value.lower()
    return _BY_LOWER.get(key) or STATUS_ALIASES.get(key)


def stored_spellings(status: BookingStatus) -> list[str]:
    """Return the lowercased stored values that normalize to ``status``.

    Used to build ``func.lower(Booking.status).in_(...)`` filters.
    """
    spellings = [status.value.lower()]
    spellings.extend(alias for alias, target in STATUS_ALIASES.items() if target is status)
    return spellings

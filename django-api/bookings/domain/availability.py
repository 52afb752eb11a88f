"""Availability reconciliation.

Turns generated occurrences and existing bookings into the calendar days a
client may pick from. Every booked day is kept even when the recurrence
rule would not produce it (a rescheduled or manually created booking), and
two entries on the same day collapse into one.

Bookings come from storage and are not trusted: a booking whose date cannot
be read is skipped and reported as a ``DataIntegrityWarning`` instead of
failing the whole computation.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Any, Protocol, overload

from dateutil.parser import isoparse

from bookings.domain.lifecycle import BookingStatus
from bookings.domain.models import Booking
from bookings.domain.recurrence import TimeInterval
from bookings.domain.value_objects import Capacity

logger = logging.getLogger(__name__)

# Statuses that no longer hold a seat.
_RELEASED_STATUSES = frozenset({BookingStatus.CANCELLED, BookingStatus.NO_SHOW})


class DataIntegrityWarning(UserWarning):
    """A stored booking whose date could not be projected to a calendar day."""

    def __init__(self, booking_id: Any, value: Any, reason: str) -> None:
        super().__init__(f"Booking {booking_id} has an unreadable date: {reason}")
        self.booking_id = booking_id
        self.value = value
        self.reason = reason


class BookedDate(Protocol):
    """Anything carrying a booking id and a raw date."""

    @property
    def id(self) -> Any: ...

    @property
    def date(self) -> Any: ...


def to_calendar_day(value: Any) -> date:
    """Project a raw booking date to its calendar day.

    Accepts datetimes, dates, epoch milliseconds and ISO-8601 strings. No
    time zone conversion happens; a datetime keeps the day it carries.

    Raises:
        ValueError: If the value cannot be read as a date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, bool):
        raise ValueError("Boolean is not a date")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=UTC).date()
        except (OverflowError, OSError) as exc:
            raise ValueError(f"Timestamp {value} is out of range") from exc
    if isinstance(value, str):
        try:
            return isoparse(value.strip()).date()
        except (OverflowError, ValueError) as exc:
            raise ValueError(f"{value!r} is not an ISO-8601 date") from exc
    raise ValueError(f"Unsupported date value of type {type(value).__name__}")


@dataclass(frozen=True)
class AvailableDateSet(Sequence[date]):
    """Ascending, duplicate-free bookable days, plus what was skipped."""

    dates: tuple[date, ...]
    warnings: tuple[DataIntegrityWarning, ...] = ()

    @overload
    def __getitem__(self, index: int) -> date: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[date, ...]: ...

    def __getitem__(self, index: int | slice) -> date | tuple[date, ...]:
        return self.dates[index]

    def __len__(self) -> int:
        return len(self.dates)


def reconcile(
    occurrences: Iterable[TimeInterval],
    bookings: Iterable[BookedDate],
) -> AvailableDateSet:
    """Merge occurrence days with booked days.

    Returns every occurrence day and every readable booking day, sorted
    ascending with duplicates removed. Capacity is not checked here.
    """
    days = {occurrence.start.date() for occurrence in occurrences}
    warnings: list[DataIntegrityWarning] = []

    for booking in bookings:
        try:
            days.add(to_calendar_day(booking.date))
        except ValueError as exc:
            logger.warning(
                "Skipping booking %s with unreadable date %r: %s",
                booking.id,
                booking.date,
                exc,
            )
            warnings.append(DataIntegrityWarning(booking.id, booking.date, str(exc)))

    return AvailableDateSet(dates=tuple(sorted(days)), warnings=tuple(warnings))


@dataclass(frozen=True)
class DateBookings:
    """Bookings that fall on one occurrence day, with seat counts."""

    day: date
    bookings: tuple[Booking, ...]
    total_participants: int
    remaining_spots: int | None

    @property
    def has_availability(self) -> bool:
        return self.remaining_spots is None or self.remaining_spots > 0


def group_bookings_by_date(
    occurrences: Iterable[TimeInterval],
    bookings: Iterable[Booking],
    capacity: Capacity | None = None,
) -> list[DateBookings]:
    """Group bookings under the occurrence day they fall on.

    Days come in occurrence order and only days with at least one booking
    are returned. Cancelled and no-show bookings are listed but do not take
    up capacity. ``capacity=None`` means unlimited, so ``remaining_spots``
    is None.
    """
    by_day: dict[date, list[Booking]] = {}
    for booking in bookings:
        try:
            day = to_calendar_day(booking.date)
        except ValueError:
            logger.debug("Booking %s has no readable date, not grouped", booking.id)
            continue
        by_day.setdefault(day, []).append(booking)

    groups: list[DateBookings] = []
    seen: set[date] = set()
    for occurrence in occurrences:
        day = occurrence.start.date()
        if day in seen or day not in by_day:
            continue
        seen.add(day)

        day_bookings = tuple(by_day[day])
        taken = sum(
            booking.participants.value
            for booking in day_bookings
            if booking.status not in _RELEASED_STATUSES
        )
        remaining = None if capacity is None else max(capacity.value - taken, 0)
        groups.append(
            DateBookings(
                day=day,
                bookings=day_bookings,
                total_participants=taken,
                remaining_spots=remaining,
            )
        )
    return groups

from bookings.domain.availability import (
    AvailableDateSet,
    DataIntegrityWarning,
    DateBookings,
    group_bookings_by_date,
    reconcile,
    to_calendar_day,
)
from bookings.domain.lifecycle import (
    TRANSITIONS,
    BookingStatus,
    PaymentStatus,
    is_terminal,
    next_statuses,
    valid_transition,
)
from bookings.domain.models import Booking, Event
from bookings.domain.recurrence import (
    EndCondition,
    Frequency,
    OccurrenceCount,
    RecurrenceRule,
    TimeInterval,
    UntilDate,
    describe,
    expand,
    iter_occurrences,
    next_interval,
)
from bookings.domain.value_objects import (
    BookingId,
    Capacity,
    ClientId,
    EventId,
    Money,
    Participants,
)

__all__ = [
    "Event",
    "Booking",
    "EventId",
    "BookingId",
    "ClientId",
    "Money",
    "Capacity",
    "Participants",
    "Frequency",
    "EndCondition",
    "OccurrenceCount",
    "UntilDate",
    "RecurrenceRule",
    "TimeInterval",
    "expand",
    "iter_occurrences",
    "next_interval",
    "describe",
    "AvailableDateSet",
    "DataIntegrityWarning",
    "DateBookings",
    "reconcile",
    "group_bookings_by_date",
    "to_calendar_day",
    "BookingStatus",
    "PaymentStatus",
    "TRANSITIONS",
    "next_statuses",
    "valid_transition",
    "is_terminal",
]

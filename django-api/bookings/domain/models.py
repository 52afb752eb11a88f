"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in bookings/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime

from bookings.domain.lifecycle import BookingStatus, PaymentStatus
from bookings.domain.recurrence import RecurrenceRule, TimeInterval
from bookings.domain.value_objects import (
    BookingId,
    Capacity,
    ClientId,
    EventId,
    Money,
    Participants,
)


@dataclass(frozen=True)
class Event:
    """Domain representation of a bookable Event.

    ``duration`` is the first occurrence; ``recurrence`` says how it repeats.
    A ``capacity`` of None means the event is not limited.
    """

    id: EventId
    name: str
    description: str
    location: str
    duration: TimeInterval
    recurrence: RecurrenceRule
    capacity: Capacity | None
    price: Money
    currency: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Booking:
    """Domain representation of a Booking."""

    id: BookingId
    event_id: EventId
    client_id: ClientId
    date: datetime
    participants: Participants
    notes: str
    status: BookingStatus
    payment_status: PaymentStatus
    amount: Money
    created_at: datetime
    updated_at: datetime

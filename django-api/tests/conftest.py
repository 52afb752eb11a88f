"""Pytest configuration and shared fixtures."""

import uuid
from dataclasses import replace
from datetime import UTC, datetime
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from bookings import models
from bookings.domain import (
    Booking,
    BookingId,
    BookingStatus,
    Capacity,
    ClientId,
    Event,
    EventId,
    Money,
    Participants,
    PaymentStatus,
    RecurrenceRule,
    TimeInterval,
    valid_transition,
)
from bookings.domain.errors import InvalidStatusTransitionError
from bookings.stores.interfaces import BookingStore, EventStore

CREATED_AT = datetime(2023, 12, 1, tzinfo=UTC)


def create_event(**overrides) -> models.Event:
    fields = {
        "name": "Yoga at dawn",
        "description": "Vinyasa flow",
        "location": "Rooftop",
        "starts_at": datetime(2024, 1, 1, 10, 0, tzinfo=UTC),
        "ends_at": datetime(2024, 1, 1, 11, 0, tzinfo=UTC),
        "frequency": "weekly",
        "end_condition_type": models.EndConditionType.OCCURRENCES,
        "end_occurrences": 3,
        "price": Decimal("200.00"),
    }
    fields.update(overrides)
    return models.Event.objects.create(**fields)


def create_booking(event: models.Event, when: datetime, **overrides) -> models.Booking:
    fields = {
        "event": event,
        "client_id": uuid.uuid4(),
        "date": when,
        "participants": 1,
        "amount": Decimal("200.00"),
    }
    fields.update(overrides)
    return models.Booking.objects.create(**fields)


def make_event(
    recurrence: RecurrenceRule | None = None,
    start: datetime = datetime(2024, 1, 1, 10, 0, tzinfo=UTC),
    end: datetime = datetime(2024, 1, 1, 11, 0, tzinfo=UTC),
    capacity: int | None = None,
) -> Event:
    return Event(
        id=EventId(uuid.uuid4()),
        name="Pottery class",
        description="Wheel throwing for beginners",
        location="Studio 2",
        duration=TimeInterval(start=start, end=end),
        recurrence=recurrence or RecurrenceRule.never(),
        capacity=Capacity(capacity) if capacity is not None else None,
        price=Money(Decimal("350.00")),
        currency="MXN",
        created_at=CREATED_AT,
        updated_at=CREATED_AT,
    )


def make_booking(
    event: Event,
    date: datetime,
    status: BookingStatus = BookingStatus.PENDING,
    participants: int = 1,
) -> Booking:
    return Booking(
        id=BookingId(uuid.uuid4()),
        event_id=event.id,
        client_id=ClientId(uuid.uuid4()),
        date=date,
        participants=Participants(participants),
        notes="",
        status=status,
        payment_status=PaymentStatus.PENDING,
        amount=Money(Decimal("350.00")),
        created_at=CREATED_AT,
        updated_at=CREATED_AT,
    )


class InMemoryEventStore(EventStore):
    def __init__(self, events: list[Event] | None = None) -> None:
        self.events = {event.id: event for event in events or []}

    def get_event(self, event_id: EventId) -> Event | None:
        return self.events.get(event_id)


class InMemoryBookingStore(BookingStore):
    def __init__(self, bookings: list[Booking] | None = None) -> None:
        self.bookings = {booking.id: booking for booking in bookings or []}
        self.writes: list[BookingId] = []

    def get_bookings_for_event(self, event_id: EventId) -> list[Booking]:
        return sorted(
            (b for b in self.bookings.values() if b.event_id == event_id),
            key=lambda b: b.date,
        )

    def get_booking(self, booking_id: BookingId) -> Booking | None:
        return self.bookings.get(booking_id)

    def update_status(self, booking_id: BookingId, status: BookingStatus) -> Booking:
        current = self.bookings[booking_id].status
        if not valid_transition(current, status):
            raise InvalidStatusTransitionError(current.label, status.label)
        self.writes.append(booking_id)
        self.bookings[booking_id] = replace(self.bookings[booking_id], status=status)
        return self.bookings[booking_id]

    def update_payment_status(
        self, booking_id: BookingId, payment_status: PaymentStatus
    ) -> Booking:
        self.writes.append(booking_id)
        self.bookings[booking_id] = replace(
            self.bookings[booking_id], payment_status=payment_status
        )
        return self.bookings[booking_id]


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()

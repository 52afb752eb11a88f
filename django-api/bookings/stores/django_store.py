"""Django ORM implementation of the event and booking stores."""

from django.db import transaction

from bookings import models
from bookings.domain import (
    Booking,
    BookingId,
    BookingStatus,
    Capacity,
    ClientId,
    EndCondition,
    Event,
    EventId,
    Frequency,
    Money,
    OccurrenceCount,
    Participants,
    PaymentStatus,
    RecurrenceRule,
    TimeInterval,
    UntilDate,
    valid_transition,
)
from bookings.domain.errors import InvalidStatusTransitionError
from bookings.stores.interfaces import BookingStore, EventStore


def _end_condition_from_row(row: models.Event) -> EndCondition:
    if row.end_condition_type == models.EndConditionType.OCCURRENCES:
        return OccurrenceCount(row.end_occurrences)
    if row.end_condition_type == models.EndConditionType.DATE:
        return UntilDate(row.end_until)
    return None


def event_from_row(row: models.Event) -> Event:
    """Convert an ORM event to its domain model.

    Raises:
        ConfigurationError: If the stored interval or recurrence is malformed.
    """
    return Event(
        id=EventId(row.id),
        name=row.name,
        description=row.description,
        location=row.location,
        duration=TimeInterval(start=row.starts_at, end=row.ends_at),
        recurrence=RecurrenceRule(
            frequency=Frequency(row.frequency),
            end_condition=_end_condition_from_row(row),
        ),
        capacity=Capacity(row.max_capacity) if row.max_capacity is not None else None,
        price=Money(row.price),
        currency=row.currency,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def booking_from_row(row: models.Booking) -> Booking:
    """Convert an ORM booking to its domain model."""
    return Booking(
        id=BookingId(row.id),
        event_id=EventId(row.event_id),
        client_id=ClientId(row.client_id),
        date=row.date,
        participants=Participants(row.participants),
        notes=row.notes,
        status=BookingStatus(row.status),
        payment_status=PaymentStatus(row.payment_status),
        amount=Money(row.amount),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class DjangoEventStore(EventStore):
    """Database-backed event store using Django ORM."""

    def get_event(self, event_id: EventId) -> Event | None:
        row = models.Event.objects.filter(id=event_id.value).first()
        if row is None:
            return None
        return event_from_row(row)


class DjangoBookingStore(BookingStore):
    """Database-backed booking store using Django ORM.

    Writes lock the booking row for the duration of the update. Status
    changes are checked against the lifecycle while the lock is held.
    """

    def get_bookings_for_event(self, event_id: EventId) -> list[Booking]:
        rows = models.Booking.objects.filter(event_id=event_id.value).order_by("date")
        return [booking_from_row(row) for row in rows]

    def get_booking(self, booking_id: BookingId) -> Booking | None:
        row = models.Booking.objects.filter(id=booking_id.value).first()
        if row is None:
            return None
        return booking_from_row(row)

    def update_status(self, booking_id: BookingId, status: BookingStatus) -> Booking:
        with transaction.atomic():
            row = models.Booking.objects.select_for_update().get(id=booking_id.value)
            current = BookingStatus(row.status)
            if not valid_transition(current, status):
                raise InvalidStatusTransitionError(current.label, status.label)
            row.status = status.value
            row.save(update_fields=["status", "updated_at"])
        return booking_from_row(row)

    def update_payment_status(
        self, booking_id: BookingId, payment_status: PaymentStatus
    ) -> Booking:
        with transaction.atomic():
            row = models.Booking.objects.select_for_update().get(id=booking_id.value)
            row.payment_status = payment_status.value
            row.save(update_fields=["payment_status", "updated_at"])
        return booking_from_row(row)

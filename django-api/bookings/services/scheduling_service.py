"""Scheduling service - all business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging

from bookings.domain import (
    AvailableDateSet,
    Booking,
    BookingId,
    BookingStatus,
    DateBookings,
    Event,
    EventId,
    PaymentStatus,
    RecurrenceRule,
    TimeInterval,
    expand,
    group_bookings_by_date,
    next_statuses,
    reconcile,
    valid_transition,
)
from bookings.domain.errors import (
    BookingNotFoundError,
    ConfigurationError,
    EventNotFoundError,
    InvalidBookingIdError,
    InvalidEventIdError,
    InvalidStatusTransitionError,
)
from bookings.stores.interfaces import BookingStore, EventStore

logger = logging.getLogger(__name__)


class SchedulingService:
    """Service for occurrence, availability and booking status operations."""

    def __init__(self, events: EventStore, bookings: BookingStore) -> None:
        self._events = events
        self._bookings = bookings

    def get_occurrences(self, event_id: str) -> list[TimeInterval]:
        """Return every occurrence of an event.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            ConfigurationError: If the event's recurrence cannot be expanded.
        """
        event = self._get_event(event_id)
        return self._expand(event.duration, event.recurrence)

    def get_schedule(self, event_id: str) -> tuple[RecurrenceRule, list[TimeInterval]]:
        """Return an event's recurrence rule together with its occurrences.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            ConfigurationError: If the event's recurrence cannot be expanded.
        """
        event = self._get_event(event_id)
        return event.recurrence, self._expand(event.duration, event.recurrence)

    def get_available_dates(self, event_id: str) -> AvailableDateSet:
        """Return the days a client may book for an event.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            ConfigurationError: If the event's recurrence cannot be expanded.
        """
        event = self._get_event(event_id)
        occurrences = self._expand(event.duration, event.recurrence)
        bookings = self._bookings.get_bookings_for_event(event.id)
        return reconcile(occurrences, bookings)

    def get_bookings_by_date(self, event_id: str) -> list[DateBookings]:
        """Return an event's bookings grouped by occurrence day.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            ConfigurationError: If the event's recurrence cannot be expanded.
        """
        event = self._get_event(event_id)
        occurrences = self._expand(event.duration, event.recurrence)
        bookings = self._bookings.get_bookings_for_event(event.id)
        return group_bookings_by_date(occurrences, bookings, event.capacity)

    def preview_occurrences(
        self, base: TimeInterval, rule: RecurrenceRule
    ) -> list[TimeInterval]:
        """Expand an unsaved interval and rule.

        Raises:
            ConfigurationError: If the rule cannot be expanded.
        """
        return self._expand(base, rule)

    def get_next_statuses(self, booking_id: str) -> tuple[Booking, frozenset[BookingStatus]]:
        """Return a booking and the statuses it may move to.

        Raises:
            InvalidBookingIdError: If the booking_id is not a valid UUID.
            BookingNotFoundError: If the booking does not exist.
        """
        booking = self._get_booking(booking_id)
        return booking, next_statuses(booking.status)

    def change_status(self, booking_id: str, status: BookingStatus) -> Booking:
        """Move a booking to a new status if the lifecycle allows it.

        Raises:
            InvalidBookingIdError: If the booking_id is not a valid UUID.
            BookingNotFoundError: If the booking does not exist.
            InvalidStatusTransitionError: If the change is not allowed.
        """
        booking = self._get_booking(booking_id)
        if not valid_transition(booking.status, status):
            logger.info(
                "Rejected status change for booking %s: %s -> %s",
                booking.id.value,
                booking.status.value,
                status.value,
            )
            raise InvalidStatusTransitionError(booking.status.label, status.label)

        try:
            updated = self._bookings.update_status(booking.id, status)
        except InvalidStatusTransitionError:
            logger.info(
                "Rejected status change for booking %s: no longer %s when writing %s",
                booking.id.value,
                booking.status.value,
                status.value,
            )
            raise
        logger.info(
            "Booking %s moved from %s to %s",
            booking.id.value,
            booking.status.value,
            status.value,
        )
        return updated

    def change_payment_status(
        self, booking_id: str, payment_status: PaymentStatus
    ) -> Booking:
        """Set a booking's payment status. Any value may follow any other.

        Raises:
            InvalidBookingIdError: If the booking_id is not a valid UUID.
            BookingNotFoundError: If the booking does not exist.
        """
        booking = self._get_booking(booking_id)
        return self._bookings.update_payment_status(booking.id, payment_status)

    def _get_event(self, event_id: str) -> Event:
        try:
            parsed = EventId.from_string(event_id)
        except ValueError as exc:
            raise InvalidEventIdError() from exc

        event = self._events.get_event(parsed)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def _get_booking(self, booking_id: str) -> Booking:
        try:
            parsed = BookingId.from_string(booking_id)
        except ValueError as exc:
            raise InvalidBookingIdError() from exc

        booking = self._bookings.get_booking(parsed)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking

    def _expand(self, base: TimeInterval, rule: RecurrenceRule) -> list[TimeInterval]:
        try:
            return expand(base, rule)
        except ConfigurationError as exc:
            logger.info("Rejected recurrence %s: %s", rule.frequency.value, exc.message)
            raise

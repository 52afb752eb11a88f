"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod

from bookings.domain import (
    Booking,
    BookingId,
    BookingStatus,
    Event,
    EventId,
    PaymentStatus,
)


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...


class BookingStore(ABC):
    """Interface for booking persistence operations."""

    @abstractmethod
    def get_bookings_for_event(self, event_id: EventId) -> list[Booking]:
        """Return all bookings for an event, ordered by date ascending."""
        ...

    @abstractmethod
    def get_booking(self, booking_id: BookingId) -> Booking | None:
        """Return a booking by ID, or None if not found."""
        ...

    @abstractmethod
    def update_status(self, booking_id: BookingId, status: BookingStatus) -> Booking:
        """Persist a new status and return the updated booking.

        The move is checked against the status currently stored, not the
        one the caller last read.

        Raises:
            InvalidStatusTransitionError: If the stored status cannot move
                to ``status``.
        """
        ...

    @abstractmethod
    def update_payment_status(
        self, booking_id: BookingId, payment_status: PaymentStatus
    ) -> Booking:
        """Persist a new payment status and return the updated booking."""
        ...

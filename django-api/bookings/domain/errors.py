"""Domain error codes for the bookings module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    INVALID_BOOKING_ID = "INVALID_BOOKING_ID"
    INVALID_RECURRENCE = "INVALID_RECURRENCE"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class BookingNotFoundError(DomainError):
    """Raised when a booking is not found."""

    def __init__(self, booking_id: str) -> None:
        super().__init__(
            code=ErrorCode.BOOKING_NOT_FOUND,
            message="Booking not found",
        )
        self.booking_id = booking_id


class InvalidEventIdError(DomainError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class InvalidBookingIdError(DomainError):
    """Raised when a booking ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_BOOKING_ID,
            message="Invalid booking ID format",
        )


class ConfigurationError(DomainError):
    """Raised when a recurrence rule or time interval cannot be expanded.

    Covers malformed rules (a repeating frequency without an end condition,
    ``never`` paired with one) and rules that could never terminate.
    """

    def __init__(self, message: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_RECURRENCE,
            message=message,
        )


class InvalidStatusTransitionError(DomainError):
    """Raised when a booking status change is not allowed by the lifecycle."""

    def __init__(self, current: str, target: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_STATUS_TRANSITION,
            message=f"Cannot move booking from {current} to {target}",
        )
        self.current = current
        self.target = target

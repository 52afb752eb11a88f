"""Booking lifecycle state machine.

Statuses and the transitions between them live in a single table,
``TRANSITIONS``, which answers both "is this change legal" and
"what can happen next". The machine only validates; callers perform the
mutation themselves after checking.

Payment status is an independent axis and is not governed here.
"""

from enum import Enum
from types import MappingProxyType


class BookingStatus(Enum):
    """Status of a booking."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    RESCHEDULED = "rescheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


class PaymentStatus(Enum):
    """Payment state of a booking. Any value may follow any other."""

    PENDING = "pending"
    PAID = "paid"
    PARTIAL = "partial"
    REFUNDED = "refunded"

    @property
    def label(self) -> str:
        return _PAYMENT_LABELS[self]


_STATUS_LABELS = {
    BookingStatus.PENDING: "Pending",
    BookingStatus.CONFIRMED: "Confirmed",
    BookingStatus.RESCHEDULED: "Rescheduled",
    BookingStatus.COMPLETED: "Completed",
    BookingStatus.CANCELLED: "Cancelled",
    BookingStatus.NO_SHOW: "No-show",
}

_PAYMENT_LABELS = {
    PaymentStatus.PENDING: "Pending",
    PaymentStatus.PAID: "Paid",
    PaymentStatus.PARTIAL: "Partial",
    PaymentStatus.REFUNDED: "Refunded",
}


TRANSITIONS: MappingProxyType[BookingStatus, frozenset[BookingStatus]] = MappingProxyType(
    {
        BookingStatus.PENDING: frozenset(
            {BookingStatus.CONFIRMED, BookingStatus.CANCELLED}
        ),
        BookingStatus.CONFIRMED: frozenset(
            {
                BookingStatus.COMPLETED,
                BookingStatus.CANCELLED,
                BookingStatus.RESCHEDULED,
                BookingStatus.NO_SHOW,
            }
        ),
        BookingStatus.RESCHEDULED: frozenset(
            {BookingStatus.CONFIRMED, BookingStatus.CANCELLED}
        ),
        # Terminal
        BookingStatus.COMPLETED: frozenset(),
        BookingStatus.CANCELLED: frozenset(),
        BookingStatus.NO_SHOW: frozenset(),
    }
)


def next_statuses(current: BookingStatus) -> frozenset[BookingStatus]:
    """Return the statuses a booking in ``current`` may move to."""
    return TRANSITIONS[current]


def valid_transition(current: BookingStatus, target: BookingStatus) -> bool:
    """Return True if ``current -> target`` is a legal change.

    A status never transitions to itself; callers wanting idempotent
    updates must skip the no-op before asking.
    """
    return target in TRANSITIONS[current]


def is_terminal(status: BookingStatus) -> bool:
    """Return True if no further transitions are possible from ``status``."""
    return not TRANSITIONS[status]

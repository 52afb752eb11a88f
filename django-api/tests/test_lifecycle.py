"""Unit tests for the booking lifecycle state machine.

Run with: pytest tests/test_lifecycle.py -v
"""

import pytest

from bookings.domain import (
    TRANSITIONS,
    BookingStatus,
    PaymentStatus,
    is_terminal,
    next_statuses,
    valid_transition,
)

TERMINAL = [BookingStatus.COMPLETED, BookingStatus.CANCELLED, BookingStatus.NO_SHOW]


class TestTransitionTable:
    """Tests for the authoritative transition table."""

    def test_every_status_has_an_entry(self):
        """Every status has a row, terminal ones included."""
        assert set(TRANSITIONS) == set(BookingStatus)

    def test_table_is_read_only(self):
        """The table cannot be changed at runtime."""
        with pytest.raises(TypeError):
            TRANSITIONS[BookingStatus.COMPLETED] = frozenset({BookingStatus.PENDING})

    def test_pending(self):
        """Pending bookings are confirmed or cancelled."""
        assert next_statuses(BookingStatus.PENDING) == {
            BookingStatus.CONFIRMED,
            BookingStatus.CANCELLED,
        }

    def test_confirmed(self):
        """Confirmed bookings can end any of four ways."""
        assert next_statuses(BookingStatus.CONFIRMED) == {
            BookingStatus.COMPLETED,
            BookingStatus.CANCELLED,
            BookingStatus.RESCHEDULED,
            BookingStatus.NO_SHOW,
        }

    def test_rescheduled(self):
        """Rescheduled bookings go back to confirmed or are cancelled."""
        assert next_statuses(BookingStatus.RESCHEDULED) == {
            BookingStatus.CONFIRMED,
            BookingStatus.CANCELLED,
        }

    @pytest.mark.parametrize("status", TERMINAL)
    def test_terminal_statuses_have_no_successors(self, status):
        """Completed, cancelled and no-show bookings never move again."""
        assert next_statuses(status) == frozenset()
        assert is_terminal(status)

    def test_active_statuses_are_not_terminal(self):
        """Statuses with successors are not terminal."""
        assert not is_terminal(BookingStatus.PENDING)
        assert not is_terminal(BookingStatus.CONFIRMED)
        assert not is_terminal(BookingStatus.RESCHEDULED)


class TestValidTransition:
    """Tests for valid_transition."""

    def test_pending_to_confirmed(self):
        """Confirming a pending booking is allowed."""
        assert valid_transition(BookingStatus.PENDING, BookingStatus.CONFIRMED)

    def test_pending_to_completed(self):
        """A pending booking cannot skip straight to completed."""
        assert not valid_transition(BookingStatus.PENDING, BookingStatus.COMPLETED)

    def test_completed_to_pending(self):
        """A completed booking cannot be reopened."""
        assert not valid_transition(BookingStatus.COMPLETED, BookingStatus.PENDING)

    @pytest.mark.parametrize("status", list(BookingStatus))
    def test_self_transition_is_never_valid(self, status):
        """No status may move to itself."""
        assert not valid_transition(status, status)

    @pytest.mark.parametrize("current", list(BookingStatus))
    @pytest.mark.parametrize("target", list(BookingStatus))
    def test_agrees_with_next_statuses(self, current, target):
        """valid_transition and next_statuses read the same table."""
        assert valid_transition(current, target) == (target in next_statuses(current))


class TestLabels:
    """Tests for display labels."""

    def test_booking_status_labels(self):
        """Labels are the human-readable names."""
        assert BookingStatus.NO_SHOW.label == "No-show"
        assert BookingStatus.RESCHEDULED.label == "Rescheduled"

    def test_payment_status_labels(self):
        """Payment labels follow declaration order."""
        assert [s.label for s in PaymentStatus] == ["Pending", "Paid", "Partial", "Refunded"]

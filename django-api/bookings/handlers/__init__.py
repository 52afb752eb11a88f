from bookings.handlers.views import (
    AvailableDatesView,
    BookingPaymentStatusView,
    BookingsByDateView,
    BookingStatusView,
    BookingTransitionsView,
    OccurrenceListView,
    RecurrencePreviewView,
)

__all__ = [
    "AvailableDatesView",
    "BookingPaymentStatusView",
    "BookingsByDateView",
    "BookingStatusView",
    "BookingTransitionsView",
    "OccurrenceListView",
    "RecurrencePreviewView",
]

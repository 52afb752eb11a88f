from django.urls import path

from bookings.handlers import (
    AvailableDatesView,
    BookingPaymentStatusView,
    BookingsByDateView,
    BookingStatusView,
    BookingTransitionsView,
    OccurrenceListView,
    RecurrencePreviewView,
)

urlpatterns = [
    path(
        "events/<str:event_id>/occurrences",
        OccurrenceListView.as_view(),
        name="occurrence-list",
    ),
    path(
        "events/<str:event_id>/available-dates",
        AvailableDatesView.as_view(),
        name="available-dates",
    ),
    path(
        "events/<str:event_id>/bookings-by-date",
        BookingsByDateView.as_view(),
        name="bookings-by-date",
    ),
    path(
        "recurrence/preview",
        RecurrencePreviewView.as_view(),
        name="recurrence-preview",
    ),
    path(
        "bookings/<str:booking_id>/transitions",
        BookingTransitionsView.as_view(),
        name="booking-transitions",
    ),
    path(
        "bookings/<str:booking_id>/status",
        BookingStatusView.as_view(),
        name="booking-status",
    ),
    path(
        "bookings/<str:booking_id>/payment-status",
        BookingPaymentStatusView.as_view(),
        name="booking-payment-status",
    ),
]

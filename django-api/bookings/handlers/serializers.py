"""Serializers for transforming domain models to API responses and parsing input."""

from rest_framework import serializers

from bookings.domain import BookingStatus, PaymentStatus


class TimeIntervalSerializer(serializers.Serializer):
    """Serializer for TimeInterval domain model."""

    startAt = serializers.DateTimeField(source="start")
    endAt = serializers.DateTimeField(source="end")


class DataIntegrityWarningSerializer(serializers.Serializer):
    """Serializer for a skipped booking date."""

    bookingId = serializers.SerializerMethodField()
    reason = serializers.CharField()

    def get_bookingId(self, warning) -> str:
        return str(getattr(warning.booking_id, "value", warning.booking_id))


class AvailableDateSetSerializer(serializers.Serializer):
    """Serializer for AvailableDateSet domain model."""

    dates = serializers.ListField(child=serializers.DateField())
    warnings = DataIntegrityWarningSerializer(many=True)


class BookingSerializer(serializers.Serializer):
    """Serializer for Booking domain model."""

    id = serializers.UUIDField(source="id.value")
    eventId = serializers.UUIDField(source="event_id.value")
    clientId = serializers.UUIDField(source="client_id.value")
    date = serializers.DateTimeField()
    participants = serializers.IntegerField(source="participants.value")
    notes = serializers.CharField()
    status = serializers.CharField(source="status.value")
    paymentStatus = serializers.CharField(source="payment_status.value")
    amount = serializers.DecimalField(
        source="amount.amount", max_digits=10, decimal_places=2
    )


class DateBookingsSerializer(serializers.Serializer):
    """Serializer for DateBookings domain model."""

    date = serializers.DateField(source="day")
    bookings = BookingSerializer(many=True)
    totalParticipants = serializers.IntegerField(source="total_participants")
    remainingSpots = serializers.IntegerField(source="remaining_spots", allow_null=True)
    hasAvailability = serializers.BooleanField(source="has_availability")


class RecurrencePreviewSerializer(serializers.Serializer):
    """Input for previewing the occurrences of an unsaved event."""

    startAt = serializers.DateTimeField()
    endAt = serializers.DateTimeField()
    recurrence = serializers.JSONField(required=False, allow_null=True)


class StatusChangeSerializer(serializers.Serializer):
    """Input for a booking status change."""

    status = serializers.ChoiceField(choices=[s.value for s in BookingStatus])


class PaymentStatusChangeSerializer(serializers.Serializer):
    """Input for a booking payment status change."""

    paymentStatus = serializers.ChoiceField(choices=[s.value for s in PaymentStatus])

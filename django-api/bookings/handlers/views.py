"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from bookings.domain import (
    BookingStatus,
    PaymentStatus,
    RecurrenceRule,
    TimeInterval,
    describe,
)
from bookings.domain.errors import DomainError, ErrorCode
from bookings.handlers.serializers import (
    AvailableDateSetSerializer,
    BookingSerializer,
    DateBookingsSerializer,
    PaymentStatusChangeSerializer,
    RecurrencePreviewSerializer,
    StatusChangeSerializer,
    TimeIntervalSerializer,
)
from bookings.services.scheduling_service import SchedulingService
from bookings.stores.django_store import DjangoBookingStore, DjangoEventStore

ERROR_STATUS = {
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.BOOKING_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_EVENT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_BOOKING_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_RECURRENCE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_STATUS_TRANSITION: status.HTTP_409_CONFLICT,
}


def error_response(error: DomainError) -> Response:
    return Response(
        {"code": error.code.value, "message": error.message},
        status=ERROR_STATUS[error.code],
    )


def schedule_response(rule: RecurrenceRule, occurrences: list[TimeInterval]) -> Response:
    return Response(
        {
            "recurrence": rule.to_primitives(),
            "summary": describe(rule),
            "occurrences": TimeIntervalSerializer(occurrences, many=True).data,
        }
    )


def validation_response(errors: dict) -> Response:
    return Response(
        {"code": "INVALID_REQUEST", "message": "Invalid request body", "fields": errors},
        status=status.HTTP_400_BAD_REQUEST,
    )


class SchedulingView(APIView):
    """Base view wiring the scheduling service to the Django stores."""

    def get_service(self) -> SchedulingService:
        return SchedulingService(events=DjangoEventStore(), bookings=DjangoBookingStore())


class OccurrenceListView(SchedulingView):
    """Handler for GET /api/events/{event_id}/occurrences"""

    def get(self, request: Request, event_id: str) -> Response:
        try:
            rule, occurrences = self.get_service().get_schedule(event_id)
        except DomainError as error:
            return error_response(error)
        return schedule_response(rule, occurrences)


class AvailableDatesView(SchedulingView):
    """Handler for GET /api/events/{event_id}/available-dates"""

    def get(self, request: Request, event_id: str) -> Response:
        try:
            available = self.get_service().get_available_dates(event_id)
        except DomainError as error:
            return error_response(error)
        return Response(AvailableDateSetSerializer(available).data)


class BookingsByDateView(SchedulingView):
    """Handler for GET /api/events/{event_id}/bookings-by-date"""

    def get(self, request: Request, event_id: str) -> Response:
        try:
            groups = self.get_service().get_bookings_by_date(event_id)
        except DomainError as error:
            return error_response(error)
        return Response(DateBookingsSerializer(groups, many=True).data)


class RecurrencePreviewView(SchedulingView):
    """Handler for POST /api/recurrence/preview"""

    def post(self, request: Request) -> Response:
        serializer = RecurrencePreviewSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)

        data = serializer.validated_data
        try:
            base = TimeInterval(start=data["startAt"], end=data["endAt"])
            rule = RecurrenceRule.from_primitives(data.get("recurrence"))
            occurrences = self.get_service().preview_occurrences(base, rule)
        except DomainError as error:
            return error_response(error)
        return schedule_response(rule, occurrences)


class BookingTransitionsView(SchedulingView):
    """Handler for GET /api/bookings/{booking_id}/transitions"""

    def get(self, request: Request, booking_id: str) -> Response:
        try:
            booking, allowed = self.get_service().get_next_statuses(booking_id)
        except DomainError as error:
            return error_response(error)
        return Response(
            {
                "status": booking.status.value,
                "nextStatuses": sorted(s.value for s in allowed),
                "terminal": not allowed,
            }
        )


class BookingStatusView(SchedulingView):
    """Handler for PATCH /api/bookings/{booking_id}/status"""

    def patch(self, request: Request, booking_id: str) -> Response:
        serializer = StatusChangeSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)

        target = BookingStatus(serializer.validated_data["status"])
        try:
            booking = self.get_service().change_status(booking_id, target)
        except DomainError as error:
            return error_response(error)
        return Response(BookingSerializer(booking).data)


class BookingPaymentStatusView(SchedulingView):
    """Handler for PATCH /api/bookings/{booking_id}/payment-status"""

    def patch(self, request: Request, booking_id: str) -> Response:
        serializer = PaymentStatusChangeSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)

        target = PaymentStatus(serializer.validated_data["paymentStatus"])
        try:
            booking = self.get_service().change_payment_status(booking_id, target)
        except DomainError as error:
            return error_response(error)
        return Response(BookingSerializer(booking).data)

"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
Generated occurrences are not stored; only the base interval and the
recurrence columns are.
"""

import uuid

from django.core.validators import MinValueValidator
from django.db import models

from bookings.domain.lifecycle import BookingStatus, PaymentStatus
from bookings.domain.recurrence import Frequency


class EndConditionType(models.TextChoices):
    OCCURRENCES = "occurrences", "Occurrences"
    DATE = "date", "Until date"


class Event(models.Model):
    """Persistence model for bookable events."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    location = models.CharField(max_length=255, blank=True)
    starts_at = models.DateTimeField()
    ends_at = models.DateTimeField()
    frequency = models.CharField(
        max_length=16,
        choices=[(f.value, f.name.title()) for f in Frequency],
        default=Frequency.NEVER.value,
    )
    end_condition_type = models.CharField(
        max_length=16, choices=EndConditionType.choices, blank=True, null=True
    )
    end_occurrences = models.PositiveIntegerField(blank=True, null=True)
    end_until = models.DateField(blank=True, null=True)
    max_capacity = models.PositiveIntegerField(blank=True, null=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    currency = models.CharField(max_length=3, default="MXN")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"]),
        ]

    def __str__(self) -> str:
        return self.name


class Booking(models.Model):
    """Persistence model for bookings against an event."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="bookings")
    client_id = models.UUIDField()
    date = models.DateTimeField()
    participants = models.PositiveIntegerField(
        default=1, validators=[MinValueValidator(1)]
    )
    notes = models.TextField(blank=True, default="")
    status = models.CharField(
        max_length=16,
        choices=[(s.value, s.label) for s in BookingStatus],
        default=BookingStatus.PENDING.value,
    )
    payment_status = models.CharField(
        max_length=16,
        choices=[(s.value, s.label) for s in PaymentStatus],
        default=PaymentStatus.PENDING.value,
    )
    amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["date"]
        indexes = [
            models.Index(fields=["event", "date"]),
        ]

    def __str__(self) -> str:
        return f"{self.event.name} - {self.date}"

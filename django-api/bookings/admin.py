from django import forms
from django.contrib import admin

from bookings.domain import BookingStatus, valid_transition
from bookings.models import Booking, Event


class BookingAdminForm(forms.ModelForm):
    """Rejects status edits the booking lifecycle does not allow."""

    class Meta:
        model = Booking
        fields = "__all__"

    def clean_status(self) -> str:
        target = BookingStatus(self.cleaned_data["status"])
        if self.instance.pk is None:
            return target.value

        current = BookingStatus(self.instance.status)
        if current is not target and not valid_transition(current, target):
            raise forms.ValidationError(
                f"Cannot move booking from {current.label} to {target.label}"
            )
        return target.value


class BookingInline(admin.TabularInline):
    model = Booking
    form = BookingAdminForm
    extra = 0
    fields = ["client_id", "date", "participants", "status", "payment_status", "amount"]


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["name", "location", "starts_at", "frequency", "created_at"]
    list_filter = ["frequency"]
    search_fields = ["name", "location"]
    inlines = [BookingInline]


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    form = BookingAdminForm
    list_display = ["event", "date", "participants", "status", "payment_status"]
    list_filter = ["status", "payment_status", "event"]

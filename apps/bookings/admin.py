"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "product",
        "user",
        "customer_name",
        "customer_email",
        "start_booking_date",
        "end_booking_date",
        "created_at",
    )
    list_filter = ("start_booking_date", "end_booking_date")
    search_fields = ("customer_name", "customer_email", "product__room_name", "user__email")
    readonly_fields = ("created_at", "updated_at")

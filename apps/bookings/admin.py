"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "vehicle",
        "user",
        "status",
        "start_date",
        "end_date",
        "total_price",
        "created_at",
    )
    list_filter = ("status", "start_date", "end_date")
    search_fields = ("vehicle__make", "vehicle__model", "user__email", "user__username")
    readonly_fields = (
        "status",
        "created_at",
        "updated_at",
        "daily_rate",
        "total_days",
        "total_price",
    )

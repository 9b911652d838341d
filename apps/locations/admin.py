"""Admin registration for locations."""

from __future__ import annotations

from django.contrib import admin

from .models import Location


@admin.register(Location)
class LocationAdmin(admin.ModelAdmin):
    list_display = ("name", "city", "state", "zip_code")
    list_filter = ("city", "state")
    search_fields = ("name", "address", "city")

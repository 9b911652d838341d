"""Admin registration for vehicles and the availability ledger."""

from __future__ import annotations

from django.contrib import admin

from .models import AvailabilityPeriod, Car, Truck


class AvailabilityPeriodInline(admin.TabularInline):
    model = AvailabilityPeriod
    extra = 0
    fields = ("start_date", "end_date", "is_available", "booking", "note")
    readonly_fields = ("booking",)


class VehicleAdmin(admin.ModelAdmin):
    list_display = ("id", "make", "model", "year", "location", "price_per_day")
    list_filter = ("transmission", "fuel_type", "location__city")
    search_fields = ("make", "model", "location__name")
    inlines = [AvailabilityPeriodInline]


@admin.register(Car)
class CarAdmin(VehicleAdmin):
    list_display = VehicleAdmin.list_display + ("seats",)


@admin.register(Truck)
class TruckAdmin(VehicleAdmin):
    list_display = VehicleAdmin.list_display + ("capacity",)


@admin.register(AvailabilityPeriod)
class AvailabilityPeriodAdmin(admin.ModelAdmin):
    list_display = ("id", "vehicle", "start_date", "end_date", "is_available", "booking")
    list_filter = ("is_available",)
    raw_id_fields = ("vehicle", "booking")

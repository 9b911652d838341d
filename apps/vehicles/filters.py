"""FilterSet definitions for vehicle listing and availability search."""

from __future__ import annotations

import django_filters  # type: ignore
from rest_framework.exceptions import ValidationError  # type: ignore

from apps.bookings.services import filter_available_vehicles
from shared.domain.value_objects import DateRange

from .models import AvailabilityPeriod, Vehicle


class VehicleFilterSet(django_filters.FilterSet):
    """Catalogue filters plus the date-range availability search.

    `start_date` and `end_date` only narrow the result when both are
    given; the range is checked by the overlap detector, not by a field
    lookup.
    """

    location = django_filters.NumberFilter(field_name="location_id", lookup_expr="exact")
    city = django_filters.CharFilter(field_name="location__city", lookup_expr="icontains")
    make = django_filters.CharFilter(field_name="make", lookup_expr="icontains")
    transmission = django_filters.CharFilter(field_name="transmission", lookup_expr="exact")
    fuel_type = django_filters.CharFilter(field_name="fuel_type", lookup_expr="exact")
    price_min = django_filters.NumberFilter(field_name="price_per_day", lookup_expr="gte")
    price_max = django_filters.NumberFilter(field_name="price_per_day", lookup_expr="lte")

    start_date = django_filters.DateFilter(method="filter_dates", input_formats=["%Y-%m-%d"])
    end_date = django_filters.DateFilter(method="filter_dates", input_formats=["%Y-%m-%d"])

    class Meta:
        model = Vehicle
        fields = ["location", "make", "transmission", "fuel_type"]

    def filter_dates(self, queryset, name, value):  # type: ignore
        # applied once both bounds are known, see filter_queryset
        return queryset

    def filter_queryset(self, queryset):  # type: ignore
        queryset = super().filter_queryset(queryset)
        start = self.form.cleaned_data.get("start_date")
        end = self.form.cleaned_data.get("end_date")
        if not (start and end):
            return queryset
        if start > end:
            raise ValidationError({"end_date": "end_date must be on or after start_date."})
        return filter_available_vehicles(queryset, DateRange(start, end))


class AvailabilityPeriodFilterSet(django_filters.FilterSet):
    """Ledger entries touching the [start, end] window."""

    start = django_filters.DateFilter(field_name="end_date", lookup_expr="gte", input_formats=["%Y-%m-%d"])
    end = django_filters.DateFilter(field_name="start_date", lookup_expr="lte", input_formats=["%Y-%m-%d"])

    class Meta:
        model = AvailabilityPeriod
        fields = ["is_available"]

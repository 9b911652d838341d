"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .domain.status import BookingStatus
from .models import Booking

ISO_DATE = ["%Y-%m-%d"]


class BookingCreateSerializer(serializers.Serializer):
    """Booking request. The vehicle is checked by the handler, so an unknown id is a 404, not a 400."""

    vehicle = serializers.IntegerField(min_value=1)
    start_date = serializers.DateField(input_formats=ISO_DATE)
    end_date = serializers.DateField(input_formats=ISO_DATE)

    def validate(self, attrs):  # type: ignore
        if attrs["start_date"] > attrs["end_date"]:
            raise serializers.ValidationError({"end_date": "startDate must be before or equal to endDate."})
        return attrs


class BookingStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[status.value for status in BookingStatus])


class BookingSummarySerializer(serializers.Serializer):
    """Output contract of booking creation."""

    id = serializers.IntegerField()
    vehicle_description = serializers.CharField()
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    status = serializers.CharField()


class BookingSerializer(serializers.ModelSerializer):
    """Full booking representation."""

    user_id = serializers.ReadOnlyField(source="user.id")
    vehicle_id = serializers.ReadOnlyField(source="vehicle.id")
    vehicle_description = serializers.ReadOnlyField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "user_id",
            "vehicle_id",
            "vehicle_description",
            "start_date",
            "end_date",
            "daily_rate",
            "total_days",
            "total_price",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

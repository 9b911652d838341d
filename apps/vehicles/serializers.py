"""Serializers for vehicles and their availability ledger."""

from __future__ import annotations

from django.db import transaction  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import AvailabilityPeriod, Car, Truck

ISO_DATE = ["%Y-%m-%d"]


class AvailabilityPeriodSerializer(serializers.ModelSerializer):
    start_date = serializers.DateField(input_formats=ISO_DATE)
    end_date = serializers.DateField(input_formats=ISO_DATE)
    booking = serializers.ReadOnlyField(source="booking_id")

    class Meta:
        model = AvailabilityPeriod
        fields = [
            "id",
            "start_date",
            "end_date",
            "is_available",
            "note",
            "booking",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "booking", "created_at", "updated_at"]

    def validate(self, attrs):  # type: ignore
        instance = getattr(self, "instance", None)
        start = attrs.get("start_date", getattr(instance, "start_date", None))
        end = attrs.get("end_date", getattr(instance, "end_date", None))
        if start and end and start > end:
            raise serializers.ValidationError("start_date must be on or before end_date.")
        return attrs


class VehicleSerializerMixin(serializers.ModelSerializer):
    """Shared vehicle fields plus initial availability windows on create."""

    description = serializers.ReadOnlyField()
    availability = AvailabilityPeriodSerializer(
        many=True,
        required=False,
        source="availability_periods",
    )

    vehicle_fields = [
        "id",
        "kind",
        "description",
        "make",
        "model",
        "year",
        "transmission",
        "fuel_type",
        "price_per_day",
        "location",
        "image",
        "features",
        "availability",
        "created_at",
        "updated_at",
    ]
    vehicle_read_only_fields = ["id", "kind", "description", "created_at", "updated_at"]

    def validate_features(self, value):  # type: ignore
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise serializers.ValidationError("Features must be a list of strings.")
        return value

    @transaction.atomic
    def create(self, validated_data):  # type: ignore
        periods = validated_data.pop("availability_periods", [])
        vehicle = super().create(validated_data)
        AvailabilityPeriod.objects.bulk_create(
            AvailabilityPeriod(vehicle=vehicle, **period) for period in periods
        )
        return vehicle

    def update(self, instance, validated_data):  # type: ignore
        if "availability_periods" in validated_data:
            raise serializers.ValidationError(
                {"availability": "Use the vehicle availability endpoint to change the ledger."}
            )
        return super().update(instance, validated_data)


class CarSerializer(VehicleSerializerMixin):
    class Meta:
        model = Car
        fields = VehicleSerializerMixin.vehicle_fields + ["seats", "price_per_hour"]
        read_only_fields = VehicleSerializerMixin.vehicle_read_only_fields


class TruckSerializer(VehicleSerializerMixin):
    class Meta:
        model = Truck
        fields = VehicleSerializerMixin.vehicle_fields + ["capacity"]
        read_only_fields = VehicleSerializerMixin.vehicle_read_only_fields

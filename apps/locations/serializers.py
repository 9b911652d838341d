"""Serializers for locations."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Location


class LocationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Location
        fields = [
            "id",
            "name",
            "address",
            "city",
            "state",
            "zip_code",
            "latitude",
            "longitude",
        ]
        read_only_fields = ["id"]

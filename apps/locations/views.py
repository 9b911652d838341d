"""API views for locations."""

from __future__ import annotations

from django.db.models import ProtectedError  # type: ignore
from rest_framework import viewsets  # type: ignore

from shared.domain.exceptions import ConflictError
from shared.infrastructure.permissions import IsStaffOrReadOnly

from .models import Location
from .serializers import LocationSerializer


class LocationViewSet(viewsets.ModelViewSet):
    """CRUD for rental locations."""

    queryset = Location.objects.all()
    serializer_class = LocationSerializer
    permission_classes = [IsStaffOrReadOnly]
    filterset_fields = ["city", "state"]

    def perform_destroy(self, instance):  # type: ignore
        try:
            instance.delete()
        except ProtectedError as exc:
            raise ConflictError("Location still has vehicles assigned.") from exc

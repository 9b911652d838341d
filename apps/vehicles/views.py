"""Vehicle catalogue and availability ledger endpoints."""

from __future__ import annotations

import logging

from django.db.models import ProtectedError  # type: ignore
from django.shortcuts import get_object_or_404  # type: ignore
from rest_framework import viewsets  # type: ignore

from shared.domain.exceptions import ConflictError
from shared.infrastructure.permissions import IsStaffOrReadOnly

from .filters import AvailabilityPeriodFilterSet, VehicleFilterSet
from .models import AvailabilityPeriod, Car, Truck, Vehicle
from .serializers import AvailabilityPeriodSerializer, CarSerializer, TruckSerializer

logger = logging.getLogger(__name__)


class VehicleViewSetMixin:
    def perform_destroy(self, instance):  # type: ignore
        vehicle_id = instance.pk
        try:
            instance.delete()
        except ProtectedError as exc:
            raise ConflictError(f"Vehicle {vehicle_id} has bookings and cannot be deleted.") from exc
        logger.info("Vehicle %s deleted by user %s", vehicle_id, self.request.user.pk)


class CarViewSet(VehicleViewSetMixin, viewsets.ModelViewSet):
    queryset = Car.objects.select_related("location").prefetch_related("availability_periods")
    serializer_class = CarSerializer
    permission_classes = [IsStaffOrReadOnly]
    filterset_class = VehicleFilterSet


class TruckViewSet(VehicleViewSetMixin, viewsets.ModelViewSet):
    queryset = Truck.objects.select_related("location").prefetch_related("availability_periods")
    serializer_class = TruckSerializer
    permission_classes = [IsStaffOrReadOnly]
    filterset_class = VehicleFilterSet


class VehicleLedgerMixin:
    """Resolves the vehicle from the URL before any handler runs."""

    vehicle_lookup_url_kwarg = "vehicle_id"

    def initial(self, request, *args, **kwargs):  # type: ignore
        super().initial(request, *args, **kwargs)
        vehicle_id = kwargs.get(self.vehicle_lookup_url_kwarg)
        self.vehicle_object = get_object_or_404(Vehicle, pk=vehicle_id)

    def get_vehicle(self) -> Vehicle:
        return self.vehicle_object


class AvailabilityPeriodViewSet(VehicleLedgerMixin, viewsets.ModelViewSet):
    """Manage the availability ledger of one vehicle.

    Entries are addressed by id. Entries owned by a booking follow that
    booking and cannot be changed here.
    """

    serializer_class = AvailabilityPeriodSerializer
    permission_classes = [IsStaffOrReadOnly]
    queryset = AvailabilityPeriod.objects.all()
    filterset_class = AvailabilityPeriodFilterSet

    def get_queryset(self):  # type: ignore
        return super().get_queryset().filter(vehicle=self.get_vehicle()).order_by("start_date", "id")

    def _ensure_editable(self, entry: AvailabilityPeriod) -> None:
        if entry.is_booking_block:
            raise ConflictError(
                f"Availability entry {entry.pk} belongs to booking {entry.booking_id}; change the booking instead."
            )

    def perform_create(self, serializer):  # type: ignore
        entry = serializer.save(vehicle=self.get_vehicle())
        logger.info(
            "Ledger entry %s added to vehicle %s by user %s",
            entry.pk,
            entry.vehicle_id,
            self.request.user.pk,
        )

    def perform_update(self, serializer):  # type: ignore
        self._ensure_editable(serializer.instance)
        entry = serializer.save()
        logger.info("Ledger entry %s updated by user %s", entry.pk, self.request.user.pk)

    def perform_destroy(self, instance):  # type: ignore
        self._ensure_editable(instance)
        logger.info("Ledger entry %s deleted by user %s", instance.pk, self.request.user.pk)
        instance.delete()

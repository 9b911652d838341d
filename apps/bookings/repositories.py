"""Storage access for the booking core.

`VehicleRepository` and `BookingRepository` are the only places the
lifecycle handlers touch the ORM. Lookups with `lock=True` must run
inside a transaction; they take a row lock (`SELECT ... FOR UPDATE`)
on backends that support it.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional

from django.db import transaction  # type: ignore
from django.db.models import Q, QuerySet  # type: ignore

from apps.vehicles.models import AvailabilityPeriod, Vehicle
from shared.domain.value_objects import DateRange

from .domain.status import BookingStatus
from .models import Booking


def overlap_q(dates: DateRange, prefix: str = "") -> Q:
    """ORM form of `ranges_overlap`: start <= candidate end and end >= candidate start."""
    return Q(**{f"{prefix}start_date__lte": dates.end_date, f"{prefix}end_date__gte": dates.start_date})


def _lock(queryset: QuerySet, lock: bool) -> QuerySet:
    if lock and transaction.get_connection().in_atomic_block:
        return queryset.select_for_update()
    return queryset


class VehicleRepository:
    """Vehicle store: lookups and ledger mutations."""

    def find_by_id(self, vehicle_id, *, lock: bool = False) -> Optional[Vehicle]:
        queryset = _lock(Vehicle.objects.filter(pk=vehicle_id), lock)
        return queryset.first()

    def blocking_periods(self, vehicle: Vehicle, dates: DateRange) -> QuerySet:
        return AvailabilityPeriod.objects.filter(vehicle=vehicle, is_available=False).filter(overlap_q(dates))

    def open_windows(self, vehicle: Vehicle) -> QuerySet:
        return AvailabilityPeriod.objects.filter(vehicle=vehicle, is_available=True)

    def append_availability_period(
        self,
        vehicle: Vehicle,
        *,
        start_date: date,
        end_date: date,
        is_available: bool,
        booking: Booking | None = None,
        note: str = "",
    ) -> AvailabilityPeriod:
        return AvailabilityPeriod.objects.create(
            vehicle=vehicle,
            start_date=start_date,
            end_date=end_date,
            is_available=is_available,
            booking=booking,
            note=note,
        )

    def remove_availability_period(self, vehicle: Vehicle, *, booking: Booking) -> int:
        """Remove the entry owned by `booking`. Returns how many rows were deleted."""
        deleted, _ = AvailabilityPeriod.objects.filter(vehicle=vehicle, booking=booking).delete()
        return deleted


class BookingRepository:
    """Booking store."""

    def find_conflicting(
        self,
        vehicle: Vehicle,
        dates: DateRange,
        *,
        exclude_booking_id=None,
    ) -> List[Booking]:
        queryset = (
            Booking.objects.filter(vehicle=vehicle)
            .exclude(status=BookingStatus.CANCELED.value)
            .filter(overlap_q(dates))
        )
        if exclude_booking_id is not None:
            queryset = queryset.exclude(pk=exclude_booking_id)
        return list(queryset.order_by("start_date"))

    def create(
        self,
        *,
        user_id,
        vehicle: Vehicle,
        dates: DateRange,
        daily_rate: Decimal,
        total_days: int,
        total_price: Decimal,
        status: BookingStatus,
    ) -> Booking:
        return Booking.objects.create(
            user_id=user_id,
            vehicle=vehicle,
            start_date=dates.start_date,
            end_date=dates.end_date,
            daily_rate=daily_rate,
            total_days=total_days,
            total_price=total_price,
            status=status.value,
        )

    def find_by_id(self, booking_id, *, lock: bool = False) -> Optional[Booking]:
        queryset = _lock(Booking.objects.filter(pk=booking_id), lock)
        return queryset.select_related("vehicle").first()

    def update_status(self, booking: Booking, status: BookingStatus) -> Booking:
        booking.status = status.value
        booking.save(update_fields=["status", "updated_at"])
        return booking

    def delete(self, booking: Booking) -> None:
        booking.delete()

    def for_user(self, user_id) -> QuerySet:
        return Booking.objects.filter(user_id=user_id).select_related("vehicle")

    def for_vehicle(self, vehicle_id) -> QuerySet:
        return Booking.objects.filter(vehicle_id=vehicle_id).select_related("vehicle", "user")

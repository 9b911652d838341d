"""Availability services: the overlap detector run against storage,
ledger reservation and release, and ledger reconciliation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from django.db.models import Exists, OuterRef, QuerySet  # type: ignore

from apps.vehicles.models import AvailabilityPeriod, Vehicle
from shared.application.uow import run_atomically
from shared.domain.exceptions import ConflictError
from shared.domain.value_objects import DateRange

from .domain.overlap import Conflict
from .domain.status import BookingStatus
from .models import Booking
from .repositories import BookingRepository, VehicleRepository, overlap_q

logger = logging.getLogger(__name__)


def find_vehicle_conflict(
    vehicle: Vehicle,
    dates: DateRange,
    *,
    exclude_booking_id=None,
    vehicle_repo: VehicleRepository | None = None,
    booking_repo: BookingRepository | None = None,
) -> Optional[Conflict]:
    """Storage-backed counterpart of `domain.overlap.find_conflict`."""
    vehicle_repo = vehicle_repo or VehicleRepository()
    booking_repo = booking_repo or BookingRepository()

    blocks = vehicle_repo.blocking_periods(vehicle, dates)
    if exclude_booking_id is not None:
        blocks = blocks.exclude(booking_id=exclude_booking_id)
    block = blocks.order_by("start_date").first()
    if block is not None:
        return Conflict("ledger", block.start_date, block.end_date)

    clashing = booking_repo.find_conflicting(vehicle, dates, exclude_booking_id=exclude_booking_id)
    if clashing:
        return Conflict("booking", clashing[0].start_date, clashing[0].end_date)

    windows = vehicle_repo.open_windows(vehicle)
    if windows.exists() and not windows.filter(
        start_date__lte=dates.start_date, end_date__gte=dates.end_date
    ).exists():
        return Conflict("window")

    return None


def ensure_vehicle_is_available(vehicle: Vehicle, dates: DateRange, **kwargs) -> None:
    """Raise ConflictError if `vehicle` cannot be booked for `dates`."""
    conflict = find_vehicle_conflict(vehicle, dates, **kwargs)
    if conflict is not None:
        logger.info(
            "Vehicle %s unavailable for %s (%s conflict)", vehicle.pk, dates, conflict.source
        )
        raise ConflictError(conflict.describe())


def filter_available_vehicles(queryset: QuerySet, dates: DateRange) -> QuerySet:
    """Narrow a vehicle queryset to vehicles with no conflict for `dates`."""
    vehicle_ref = OuterRef("pk")

    blocked = AvailabilityPeriod.objects.filter(vehicle_id=vehicle_ref, is_available=False).filter(
        overlap_q(dates)
    )
    booked = (
        Booking.objects.filter(vehicle_id=vehicle_ref)
        .exclude(status=BookingStatus.CANCELED.value)
        .filter(overlap_q(dates))
    )
    windows = AvailabilityPeriod.objects.filter(vehicle_id=vehicle_ref, is_available=True)
    covering = windows.filter(start_date__lte=dates.start_date, end_date__gte=dates.end_date)

    return queryset.filter(~Exists(blocked), ~Exists(booked)).filter(~Exists(windows) | Exists(covering))


def reserve_dates_for_booking(booking: Booking, vehicle_repo: VehicleRepository | None = None) -> AvailabilityPeriod:
    """Append the ledger block owned by `booking`."""
    vehicle_repo = vehicle_repo or VehicleRepository()
    return vehicle_repo.append_availability_period(
        booking.vehicle,
        start_date=booking.start_date,
        end_date=booking.end_date,
        is_available=False,
        booking=booking,
        note=f"Booking {booking.pk}",
    )


def release_dates_for_booking(booking: Booking, vehicle_repo: VehicleRepository | None = None) -> bool:
    """Remove the ledger block owned by `booking`.

    Returns False when no entry references the booking any more; that
    drift is logged and left for `reconcile_vehicle_ledger`.
    """
    vehicle_repo = vehicle_repo or VehicleRepository()
    removed = vehicle_repo.remove_availability_period(booking.vehicle, booking=booking)
    if not removed:
        logger.warning(
            "No ledger entry found for booking %s on vehicle %s", booking.pk, booking.vehicle_id
        )
    return bool(removed)


@dataclass
class ReconciliationReport:
    vehicle_id: int
    removed: list[int] = field(default_factory=list)
    realigned: list[int] = field(default_factory=list)
    created: list[int] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.removed or self.realigned or self.created)


def _plan_reconciliation(vehicle: Vehicle, report: ReconciliationReport, apply: bool) -> None:
    entries = AvailabilityPeriod.objects.filter(vehicle=vehicle, booking__isnull=False).select_related("booking")
    covered_booking_ids = set()

    for entry in entries:
        booking = entry.booking
        if booking.status == BookingStatus.CANCELED.value:
            report.removed.append(entry.pk)
            if apply:
                entry.delete()
            continue
        covered_booking_ids.add(booking.pk)
        if entry.dates != booking.dates or entry.is_available:
            report.realigned.append(entry.pk)
            if apply:
                entry.start_date = booking.start_date
                entry.end_date = booking.end_date
                entry.is_available = False
                entry.save(update_fields=["start_date", "end_date", "is_available", "updated_at"])

    missing = (
        Booking.objects.filter(vehicle=vehicle)
        .exclude(status=BookingStatus.CANCELED.value)
        .exclude(pk__in=covered_booking_ids)
        .select_related("vehicle")
    )
    for booking in missing:
        report.created.append(booking.pk)
        if apply:
            reserve_dates_for_booking(booking)


def reconcile_vehicle_ledger(vehicle: Vehicle, *, dry_run: bool = False) -> ReconciliationReport:
    """Rebuild the booking-owned ledger entries of `vehicle` from its bookings.

    Open windows and manual blocks are not touched. With `dry_run` the
    report lists what would change without writing anything.
    """
    def operation(uow):
        report = ReconciliationReport(vehicle_id=vehicle.pk)
        VehicleRepository().find_by_id(vehicle.pk, lock=True)
        _plan_reconciliation(vehicle, report, apply=not dry_run)
        return report

    report = run_atomically(operation)
    if report.changed:
        logger.warning(
            "Ledger drift on vehicle %s: removed=%s realigned=%s created=%s%s",
            vehicle.pk,
            report.removed,
            report.realigned,
            report.created,
            " (dry run)" if dry_run else "",
        )
    return report

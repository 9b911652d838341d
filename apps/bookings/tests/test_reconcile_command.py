from datetime import date
from decimal import Decimal
from io import StringIO

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import CommandError

from apps.bookings.application.command_handlers import CreateBookingCommand, CreateBookingHandler
from apps.bookings.models import Booking
from apps.bookings.services import reconcile_vehicle_ledger
from apps.locations.models import Location
from apps.vehicles.models import AvailabilityPeriod, Car


@pytest.fixture
def car():
    location = Location.objects.create(
        name="Harbor",
        address="9 Pier St",
        city="Seattle",
        state="WA",
        zip_code="98101",
        latitude=Decimal("47.606200"),
        longitude=Decimal("-122.332100"),
    )
    return Car.objects.create(
        make="Kia",
        model="Niro",
        year=2022,
        transmission=Car.Transmission.AUTOMATIC,
        fuel_type=Car.FuelType.HYBRID,
        price_per_day=Decimal("70.00"),
        location=location,
        seats=5,
        price_per_hour=Decimal("10.00"),
    )


@pytest.fixture
def drifted(car):
    """One booking per kind of drift, plus an operator window that must survive."""
    user = get_user_model().objects.create_user(username="ops", password="pass")
    handler = CreateBookingHandler()

    def book(start, end):
        return handler.handle(CreateBookingCommand(user.pk, car.pk, start, end))

    moved = book(date(2024, 6, 1), date(2024, 6, 3))
    AvailabilityPeriod.objects.filter(booking=moved).update(end_date=date(2024, 6, 9))

    orphan = book(date(2024, 6, 10), date(2024, 6, 12))
    AvailabilityPeriod.objects.filter(booking=orphan).delete()

    stale = book(date(2024, 6, 20), date(2024, 6, 22))
    Booking.objects.filter(pk=stale.pk).update(status="canceled")

    window = AvailabilityPeriod.objects.create(
        vehicle=car, start_date=date(2024, 1, 1), end_date=date(2024, 12, 31), is_available=True
    )
    return {"moved": moved, "orphan": orphan, "stale": stale, "window": window}


@pytest.mark.django_db
def test_reconcile_repairs_booking_entries(car, drifted):
    report = reconcile_vehicle_ledger(car)

    assert report.changed
    assert len(report.removed) == len(report.realigned) == len(report.created) == 1
    assert report.created == [drifted["orphan"].pk]

    moved_entry = AvailabilityPeriod.objects.get(booking=drifted["moved"])
    assert moved_entry.end_date == date(2024, 6, 3)
    assert AvailabilityPeriod.objects.filter(booking=drifted["orphan"], is_available=False).exists()
    assert not AvailabilityPeriod.objects.filter(booking=drifted["stale"]).exists()
    assert AvailabilityPeriod.objects.filter(pk=drifted["window"].pk).exists()

    assert not reconcile_vehicle_ledger(car).changed


@pytest.mark.django_db
def test_dry_run_changes_nothing(car, drifted):
    before = list(AvailabilityPeriod.objects.values_list("pk", "start_date", "end_date"))
    out = StringIO()

    call_command("reconcile_availability", "--dry-run", stdout=out)

    assert f"Vehicle {car.pk}:" in out.getvalue()
    assert "1 vehicle ledger(s) would change" in out.getvalue()
    assert list(AvailabilityPeriod.objects.values_list("pk", "start_date", "end_date")) == before


@pytest.mark.django_db
def test_command_applies_changes_for_one_vehicle(car, drifted):
    out = StringIO()

    call_command("reconcile_availability", "--vehicle", str(car.pk), stdout=out)

    assert "1 vehicle ledger(s) reconciled" in out.getvalue()
    assert AvailabilityPeriod.objects.filter(booking__isnull=False).count() == 2


@pytest.mark.django_db
def test_command_rejects_unknown_vehicle():
    with pytest.raises(CommandError):
        call_command("reconcile_availability", "--vehicle", "999")

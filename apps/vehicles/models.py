"""Vehicle and availability ledger models."""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore

from shared.domain.value_objects import DateRange


class Vehicle(models.Model):
    """Rentable vehicle. Concrete base of `Car` and `Truck`."""

    class Kind(models.TextChoices):
        CAR = "car", "Car"
        TRUCK = "truck", "Truck"

    class Transmission(models.TextChoices):
        AUTOMATIC = "automatic", "Automatic"
        MANUAL = "manual", "Manual"

    class FuelType(models.TextChoices):
        PETROL = "petrol", "Petrol"
        DIESEL = "diesel", "Diesel"
        HYBRID = "hybrid", "Hybrid"
        ELECTRIC = "electric", "Electric"

    kind = models.CharField(max_length=10, choices=Kind.choices, editable=False)
    make = models.CharField(max_length=100)
    model = models.CharField(max_length=100)
    year = models.PositiveSmallIntegerField()
    transmission = models.CharField(max_length=20, choices=Transmission.choices)
    fuel_type = models.CharField(max_length=20, choices=FuelType.choices)
    price_per_day = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    location = models.ForeignKey(
        "locations.Location",
        on_delete=models.PROTECT,
        related_name="vehicles",
    )
    image = models.URLField(max_length=500, blank=True)
    features = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["make", "model", "id"]
        indexes = [models.Index(fields=["kind", "location"], name="vehicle_kind_location_idx")]

    def __str__(self) -> str:
        return f"{self.description} ({self.year})"

    @property
    def description(self) -> str:
        return f"{self.make} {self.model}"


class Car(Vehicle):
    seats = models.PositiveSmallIntegerField()
    price_per_hour = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    def save(self, *args, **kwargs):  # type: ignore
        self.kind = Vehicle.Kind.CAR
        super().save(*args, **kwargs)


class Truck(Vehicle):
    capacity = models.CharField(max_length=50, help_text="Payload or volume, e.g. '3.5t' or '20m3'.")

    def save(self, *args, **kwargs):  # type: ignore
        self.kind = Vehicle.Kind.TRUCK
        super().save(*args, **kwargs)


class AvailabilityPeriod(models.Model):
    """Ledger entry: a closed date interval flagged available or unavailable.

    Entries with a `booking` are owned by that booking and follow its
    lifecycle. Entries without one are open windows (`is_available=True`)
    or manual blocks declared by staff. Entries are appended, not merged,
    so they may overlap each other.
    """

    vehicle = models.ForeignKey(
        Vehicle,
        on_delete=models.CASCADE,
        related_name="availability_periods",
    )
    start_date = models.DateField()
    end_date = models.DateField()
    is_available = models.BooleanField(default=True)
    booking = models.OneToOneField(
        "bookings.Booking",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="ledger_entry",
    )
    note = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["start_date", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gte=models.F("start_date")),
                name="availability_valid_date_range",
            ),
        ]
        indexes = [
            models.Index(fields=["vehicle", "start_date", "end_date"], name="avail_vehicle_dates_idx"),
            models.Index(fields=["vehicle", "is_available"], name="avail_vehicle_flag_idx"),
        ]

    def __str__(self) -> str:
        flag = "available" if self.is_available else "blocked"
        return f"{self.vehicle_id}: {self.start_date} - {self.end_date} ({flag})"

    @property
    def dates(self) -> DateRange:
        return DateRange(self.start_date, self.end_date)

    @property
    def is_booking_block(self) -> bool:
        return self.booking_id is not None

"""Booking models."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore

from shared.domain.value_objects import DateRange

from .domain.status import BookingStatus


class Booking(models.Model):
    """Reservation of one vehicle for a closed range of days.

    Source of truth for availability: the vehicle ledger's booking-owned
    entries are a projection of the non-canceled rows of this table.
    """

    STATUS_CHOICES = [(status.value, status.label) for status in BookingStatus]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    vehicle = models.ForeignKey(
        "vehicles.Vehicle",
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    start_date = models.DateField()
    end_date = models.DateField()
    daily_rate = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Vehicle daily rate at the moment of booking.",
    )
    total_days = models.PositiveIntegerField(default=1)
    total_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    status = models.CharField(
        max_length=16,
        choices=STATUS_CHOICES,
        default=BookingStatus.CONFIRMED.value,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gte=models.F("start_date")),
                name="booking_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["vehicle", "start_date", "end_date"], name="booking_vehicle_dates_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} for vehicle {self.vehicle_id} ({self.status})"

    @property
    def dates(self) -> DateRange:
        return DateRange(self.start_date, self.end_date)

    @property
    def current_status(self) -> BookingStatus:
        return BookingStatus(self.status)

    @property
    def vehicle_description(self) -> str:
        return self.vehicle.description

    def is_owned_by(self, user_id) -> bool:
        return self.user_id is not None and str(self.user_id) == str(user_id)

"""Ledger management endpoint tests."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.application.command_handlers import CreateBookingCommand, CreateBookingHandler
from apps.locations.models import Location
from apps.vehicles.models import AvailabilityPeriod, Truck

User = get_user_model()


class AvailabilityLedgerAPITests(APITestCase):
    def setUp(self) -> None:
        self.staff = User.objects.create_user(username="fleet", password="FleetPass123", is_staff=True)
        self.renter = User.objects.create_user(username="renter", password="RenterPass123")
        location = Location.objects.create(
            name="Yard",
            address="77 Freight Ln",
            city="Reno",
            state="NV",
            zip_code="89501",
            latitude=Decimal("39.529600"),
            longitude=Decimal("-119.813800"),
        )
        self.truck = Truck.objects.create(
            make="Mercedes",
            model="Sprinter",
            year=2020,
            transmission=Truck.Transmission.AUTOMATIC,
            fuel_type=Truck.FuelType.DIESEL,
            price_per_day=Decimal("140.00"),
            location=location,
            capacity="12m3",
        )
        self.list_url = reverse("vehicle-availability-list", kwargs={"vehicle_id": self.truck.pk})
        self.client.force_authenticate(self.staff)

    def _detail_url(self, pk: int) -> str:
        return reverse("vehicle-availability-detail", kwargs={"vehicle_id": self.truck.pk, "pk": pk})

    def test_staff_manages_entries_by_id(self) -> None:
        created = self.client.post(
            self.list_url,
            {"start_date": "2024-09-01", "end_date": "2024-09-03", "is_available": False, "note": "Tyres"},
            format="json",
        )
        self.assertEqual(created.status_code, status.HTTP_201_CREATED, created.data)
        self.assertIsNone(created.data["booking"])

        url = self._detail_url(created.data["id"])
        updated = self.client.patch(url, {"end_date": "2024-09-05"}, format="json")
        self.assertEqual(updated.status_code, status.HTTP_200_OK, updated.data)
        self.assertEqual(AvailabilityPeriod.objects.get().end_date, date(2024, 9, 5))

        deleted = self.client.delete(url)
        self.assertEqual(deleted.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(AvailabilityPeriod.objects.exists())

    def test_list_filters_by_range(self) -> None:
        AvailabilityPeriod.objects.create(vehicle=self.truck, start_date=date(2024, 1, 1), end_date=date(2024, 1, 5))
        AvailabilityPeriod.objects.create(vehicle=self.truck, start_date=date(2024, 3, 1), end_date=date(2024, 3, 5))

        self.client.force_authenticate(None)
        response = self.client.get(self.list_url, {"start": "2024-02-01"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([p["start_date"] for p in response.data], ["2024-03-01"])

    def test_non_staff_cannot_write(self) -> None:
        self.client.force_authenticate(self.renter)
        response = self.client.post(
            self.list_url, {"start_date": "2024-09-01", "end_date": "2024-09-03"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_start_after_end_rejected(self) -> None:
        response = self.client.post(
            self.list_url, {"start_date": "2024-09-03", "end_date": "2024-09-01"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_vehicle_is_not_found(self) -> None:
        url = reverse("vehicle-availability-list", kwargs={"vehicle_id": self.truck.pk + 50})
        self.assertEqual(self.client.get(url).status_code, status.HTTP_404_NOT_FOUND)

    def test_booking_entries_cannot_be_edited(self) -> None:
        booking = CreateBookingHandler().handle(CreateBookingCommand(
            user_id=self.renter.pk,
            vehicle_id=self.truck.pk,
            start_date=date(2024, 9, 10),
            end_date=date(2024, 9, 12),
        ))
        entry = AvailabilityPeriod.objects.get(booking=booking)
        url = self._detail_url(entry.pk)

        patched = self.client.patch(url, {"is_available": True}, format="json")
        deleted = self.client.delete(url)

        self.assertEqual(patched.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(deleted.status_code, status.HTTP_409_CONFLICT)
        entry.refresh_from_db()
        self.assertFalse(entry.is_available)

    def test_list_filters_by_end_and_flag(self) -> None:
        AvailabilityPeriod.objects.create(vehicle=self.truck, start_date=date(2024, 1, 1), end_date=date(2024, 1, 5))
        AvailabilityPeriod.objects.create(
            vehicle=self.truck, start_date=date(2024, 1, 3), end_date=date(2024, 1, 4), is_available=False
        )
        AvailabilityPeriod.objects.create(vehicle=self.truck, start_date=date(2024, 3, 1), end_date=date(2024, 3, 5))

        response = self.client.get(self.list_url, {"end": "2024-01-31", "is_available": "true"})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([p["start_date"] for p in response.data], ["2024-01-01"])

    def test_invalid_range_dates_are_bad_request(self) -> None:
        for params in ({"start": "2024-13-45"}, {"end": "not-a-date"}, {"start": "05/01/2024"}):
            with self.subTest(params=params):
                response = self.client.get(self.list_url, params)
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

"""Integration tests for the vehicle catalogue and availability search."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.application.command_handlers import CreateBookingCommand, CreateBookingHandler
from apps.locations.models import Location
from apps.vehicles.models import AvailabilityPeriod, Car, Truck, Vehicle

User = get_user_model()


def make_location(city: str = "Austin") -> Location:
    return Location.objects.create(
        name=f"{city} Central",
        address="100 Congress Ave",
        city=city,
        state="TX",
        zip_code="78701",
        latitude=Decimal("30.267200"),
        longitude=Decimal("-97.743100"),
    )


def make_car(location: Location, **overrides) -> Car:
    data = {
        "make": "Mazda",
        "model": "3",
        "year": 2022,
        "transmission": Car.Transmission.MANUAL,
        "fuel_type": Car.FuelType.PETROL,
        "price_per_day": Decimal("55.00"),
        "location": location,
        "seats": 5,
        "price_per_hour": Decimal("9.00"),
    }
    data.update(overrides)
    return Car.objects.create(**data)


class VehicleCatalogueTests(APITestCase):
    def setUp(self) -> None:
        self.staff = User.objects.create_user(username="staff", password="StaffPass123", is_staff=True)
        self.customer = User.objects.create_user(username="customer", password="CustomerPass123")
        self.location = make_location()

    def _car_payload(self, **overrides) -> dict[str, object]:
        payload: dict[str, object] = {
            "make": "Tesla",
            "model": "Model 3",
            "year": 2023,
            "transmission": "automatic",
            "fuel_type": "electric",
            "price_per_day": "120.00",
            "location": self.location.pk,
            "features": ["autopilot", "heated seats"],
            "seats": 5,
            "price_per_hour": "20.00",
        }
        payload.update(overrides)
        return payload

    def test_staff_creates_car_with_initial_availability(self) -> None:
        self.client.force_authenticate(self.staff)
        payload = self._car_payload(
            availability=[{"start_date": "2024-06-01", "end_date": "2024-08-31", "is_available": True}]
        )

        response = self.client.post(reverse("car-list"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["kind"], "car")
        self.assertEqual(response.data["description"], "Tesla Model 3")
        car = Car.objects.get(pk=response.data["id"])
        self.assertEqual(car.kind, Vehicle.Kind.CAR)
        period = AvailabilityPeriod.objects.get(vehicle=car)
        self.assertTrue(period.is_available)
        self.assertEqual(period.end_date, date(2024, 8, 31))

    def test_customer_cannot_create_vehicles(self) -> None:
        self.client.force_authenticate(self.customer)
        response = self.client.post(reverse("car-list"), self._car_payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_anyone_can_list(self) -> None:
        make_car(self.location)
        response = self.client.get(reverse("car-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

    def test_truck_crud(self) -> None:
        self.client.force_authenticate(self.staff)
        payload = self._car_payload(make="Isuzu", model="NPR", fuel_type="diesel", capacity="5t")
        payload.pop("seats")
        payload.pop("price_per_hour")

        created = self.client.post(reverse("truck-list"), payload, format="json")
        self.assertEqual(created.status_code, status.HTTP_201_CREATED, created.data)
        url = reverse("truck-detail", args=[created.data["id"]])

        updated = self.client.patch(url, {"price_per_day": "150.00"}, format="json")
        self.assertEqual(updated.status_code, status.HTTP_200_OK, updated.data)
        self.assertEqual(Truck.objects.get().price_per_day, Decimal("150.00"))

        deleted = self.client.delete(url)
        self.assertEqual(deleted.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Vehicle.objects.exists())

    def test_update_rejects_nested_availability(self) -> None:
        car = make_car(self.location)
        self.client.force_authenticate(self.staff)

        response = self.client.patch(
            reverse("car-detail", args=[car.pk]),
            {"availability": [{"start_date": "2024-06-01", "end_date": "2024-06-02"}]},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_invalid_window_rejected(self) -> None:
        self.client.force_authenticate(self.staff)
        payload = self._car_payload(availability=[{"start_date": "2024-06-05", "end_date": "2024-06-01"}])

        response = self.client.post(reverse("car-list"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Car.objects.exists())


class AvailabilitySearchTests(APITestCase):
    """Date-range search agrees with the booking overlap detector."""

    def setUp(self) -> None:
        self.renter = User.objects.create_user(username="renter", password="RenterPass123")
        self.location = make_location()
        self.elsewhere = make_location("Dallas")
        self.booked = make_car(self.location, model="Booked")
        self.blocked = make_car(self.location, model="Blocked")
        self.windowed = make_car(self.location, model="Windowed")
        self.free = make_car(self.location, model="Free")
        self.remote = make_car(self.elsewhere, model="Remote")

        CreateBookingHandler().handle(CreateBookingCommand(
            user_id=self.renter.pk,
            vehicle_id=self.booked.pk,
            start_date=date(2024, 6, 3),
            end_date=date(2024, 6, 6),
        ))
        AvailabilityPeriod.objects.create(
            vehicle=self.blocked, start_date=date(2024, 6, 1), end_date=date(2024, 6, 1), is_available=False
        )
        AvailabilityPeriod.objects.create(
            vehicle=self.windowed, start_date=date(2024, 7, 1), end_date=date(2024, 7, 31), is_available=True
        )

    def _search(self, **params):
        return self.client.get(reverse("car-list"), params)

    def _models(self, response) -> list[str]:
        return sorted(item["model"] for item in response.data)

    def test_search_excludes_conflicting_vehicles(self) -> None:
        response = self._search(start_date="2024-06-01", end_date="2024-06-03", location=self.location.pk)

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(self._models(response), ["Free"])

    def test_search_inside_window(self) -> None:
        response = self._search(start_date="2024-07-10", end_date="2024-07-12")
        self.assertEqual(self._models(response), ["Blocked", "Booked", "Free", "Remote", "Windowed"])

    def test_canceled_booking_no_longer_hides_vehicle(self) -> None:
        self.booked.bookings.update(status="canceled")
        AvailabilityPeriod.objects.filter(vehicle=self.booked).delete()

        response = self._search(start_date="2024-06-04", end_date="2024-06-05", location=self.location.pk)

        self.assertEqual(self._models(response), ["Blocked", "Booked", "Free"])

    def test_single_date_is_ignored(self) -> None:
        response = self._search(start_date="2024-06-01")
        self.assertEqual(len(response.data), 5)

    def test_start_after_end_is_bad_request(self) -> None:
        response = self._search(start_date="2024-06-05", end_date="2024-06-01")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_catalogue_filters(self) -> None:
        make_car(self.location, model="Pricey", price_per_day=Decimal("300.00"))
        response = self._search(price_min="100")
        self.assertEqual(self._models(response), ["Pricey"])
        response = self._search(city="dallas")
        self.assertEqual(self._models(response), ["Remote"])


class VehicleDeletionTests(APITestCase):
    def test_vehicle_with_bookings_cannot_be_deleted(self) -> None:
        staff = User.objects.create_user(username="staff", password="StaffPass123", is_staff=True)
        car = make_car(make_location())
        CreateBookingHandler().handle(CreateBookingCommand(
            user_id=staff.pk,
            vehicle_id=car.pk,
            start_date=date(2024, 6, 1),
            end_date=date(2024, 6, 2),
        ))
        self.client.force_authenticate(staff)

        response = self.client.delete(reverse("car-detail", args=[car.pk]))

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertTrue(Car.objects.filter(pk=car.pk).exists())

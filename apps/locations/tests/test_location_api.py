from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework.test import APIClient

from apps.locations.models import Location


@pytest.fixture
def staff_client():
    user = get_user_model().objects.create_user(username="staff", password="pass", is_staff=True)
    client = APIClient()
    client.force_authenticate(user)
    return client


PAYLOAD = {
    "name": "Union Station",
    "address": "800 N Alameda St",
    "city": "Los Angeles",
    "state": "CA",
    "zip_code": "90012",
    "latitude": "34.056200",
    "longitude": "-118.236500",
}


@pytest.mark.django_db
def test_staff_location_crud(staff_client):
    created = staff_client.post(reverse("location-list"), PAYLOAD, format="json")
    assert created.status_code == 201, created.data

    url = reverse("location-detail", args=[created.data["id"]])
    updated = staff_client.patch(url, {"zip_code": "90013"}, format="json")
    assert updated.status_code == 200
    assert Location.objects.get().zip_code == "90013"

    assert staff_client.delete(url).status_code == 204
    assert not Location.objects.exists()


@pytest.mark.django_db
def test_latitude_out_of_range(staff_client):
    response = staff_client.post(reverse("location-list"), {**PAYLOAD, "latitude": "91.000000"}, format="json")
    assert response.status_code == 400
    assert "latitude" in response.data


@pytest.mark.django_db
def test_public_read_and_city_filter():
    Location.objects.create(**{**PAYLOAD, "latitude": Decimal("34.0562"), "longitude": Decimal("-118.2365")})
    Location.objects.create(
        **{**PAYLOAD, "name": "Pike Place", "city": "Seattle", "state": "WA",
           "latitude": Decimal("47.6097"), "longitude": Decimal("-122.3422")}
    )
    client = APIClient()

    response = client.get(reverse("location-list"), {"city": "Seattle"})

    assert response.status_code == 200
    assert [loc["name"] for loc in response.data] == ["Pike Place"]


@pytest.mark.django_db
def test_customer_cannot_create():
    user = get_user_model().objects.create_user(username="customer", password="pass")
    client = APIClient()
    client.force_authenticate(user)

    assert client.post(reverse("location-list"), PAYLOAD, format="json").status_code == 403


@pytest.mark.django_db
def test_health_ping():
    response = APIClient().get(reverse("health-ping"))
    assert response.json() == {"message": "pong"}

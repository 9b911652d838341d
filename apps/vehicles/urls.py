from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import AvailabilityPeriodViewSet, CarViewSet, TruckViewSet

router = DefaultRouter()
router.register(r"cars", CarViewSet, basename="car")
router.register(r"trucks", TruckViewSet, basename="truck")

availability_list = AvailabilityPeriodViewSet.as_view({"get": "list", "post": "create"})
availability_detail = AvailabilityPeriodViewSet.as_view(
    {
        "get": "retrieve",
        "put": "update",
        "patch": "partial_update",
        "delete": "destroy",
    }
)

urlpatterns = [
    path("", include(router.urls)),
    path(
        "vehicles/<int:vehicle_id>/availability/",
        availability_list,
        name="vehicle-availability-list",
    ),
    path(
        "vehicles/<int:vehicle_id>/availability/<int:pk>/",
        availability_detail,
        name="vehicle-availability-detail",
    ),
]

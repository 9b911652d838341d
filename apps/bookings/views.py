"""API views for the booking domain."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from .application.command_handlers import (
    BookingSummary,
    CancelBookingHandler,
    CreateBookingCommand,
    CreateBookingHandler,
    DeleteBookingCommand,
    DeleteBookingHandler,
    GetBookingHandler,
    UpdateBookingStatusCommand,
    UpdateBookingStatusHandler,
)
from .models import Booking
from .repositories import BookingRepository
from .serializers import (
    BookingCreateSerializer,
    BookingSerializer,
    BookingStatusSerializer,
    BookingSummarySerializer,
)


def _is_admin(user) -> bool:
    return bool(getattr(user, "is_staff", False) or getattr(user, "is_superuser", False))


class BookingViewSet(viewsets.GenericViewSet):
    """Create, read, update status, cancel and delete bookings.

    Authorization and state rules live in the command handlers; this
    layer only validates input and shapes responses.
    """

    queryset = Booking.objects.select_related("vehicle", "user").all()
    serializer_class = BookingSerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends: list = []
    lookup_value_regex = r"\d+"

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action in {"update", "partial_update"}:
            return BookingStatusSerializer
        return BookingSerializer

    def list(self, request):  # type: ignore
        user = request.user
        qs = self.get_queryset() if _is_admin(user) else BookingRepository().for_user(user.id)
        serializer = BookingSerializer(qs.order_by("-created_at", "-id"), many=True)
        return Response(serializer.data)

    def create(self, request):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = CreateBookingHandler().handle(CreateBookingCommand(
            user_id=request.user.id,
            vehicle_id=serializer.validated_data["vehicle"],
            start_date=serializer.validated_data["start_date"],
            end_date=serializer.validated_data["end_date"],
        ))
        summary = BookingSummarySerializer(BookingSummary.from_booking(booking))
        return Response(
            {"message": "Booking confirmed successfully", "booking": summary.data},
            status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, pk=None):  # type: ignore
        booking = GetBookingHandler().handle(pk, request.user.id, _is_admin(request.user))
        return Response(BookingSerializer(booking).data)

    def update(self, request, pk=None, partial=False):  # type: ignore
        serializer = BookingStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = UpdateBookingStatusHandler().handle(UpdateBookingStatusCommand(
            booking_id=pk,
            requester_id=request.user.id,
            is_admin=_is_admin(request.user),
            status=serializer.validated_data["status"],
        ))
        return Response(BookingSerializer(booking).data)

    def partial_update(self, request, pk=None):  # type: ignore
        return self.update(request, pk=pk, partial=True)

    def destroy(self, request, pk=None):  # type: ignore
        DeleteBookingHandler().handle(DeleteBookingCommand(
            booking_id=pk,
            requester_id=request.user.id,
            is_admin=_is_admin(request.user),
        ))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        booking = CancelBookingHandler().cancel(pk, request.user.id, _is_admin(request.user))
        return Response({"id": booking.pk, "status": booking.status}, status=status.HTTP_200_OK)

    @action(detail=False, methods=["get"], url_path=r"vehicle/(?P<vehicle_id>\d+)")
    def vehicle(self, request, vehicle_id=None):  # type: ignore
        qs = BookingRepository().for_vehicle(vehicle_id).order_by("-created_at", "-id")
        return Response(BookingSerializer(qs, many=True).data)

"""
Booking Command Handlers

These are the use cases for the booking domain.
They orchestrate domain operations within transactions.

Commands:
- CreateBookingCommand: Create a new booking
- UpdateBookingStatusCommand: Move a booking through the state machine
- DeleteBookingCommand: Hard-delete a booking and free its dates
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
import logging

from shared.application.uow import DjangoUnitOfWork, run_atomically
from shared.domain.exceptions import ForbiddenError, NotFoundError
from shared.domain.value_objects import DateRange
from apps.bookings.domain.events import BookingCreated, BookingDeleted, BookingStatusChanged
from apps.bookings.domain.pricing import calculate_total_price, chargeable_days
from apps.bookings.domain.status import DEFAULT_CREATION_STATUS, BookingStatus, ensure_transition
from apps.bookings.models import Booking
from apps.bookings.repositories import BookingRepository, VehicleRepository
from apps.bookings.services import (
    ensure_vehicle_is_available,
    release_dates_for_booking,
    reserve_dates_for_booking,
)

logger = logging.getLogger(__name__)


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    """
    Command to create a new booking

    `user_id` is the authenticated caller; the handler trusts it.
    """
    user_id: int
    vehicle_id: int
    start_date: date
    end_date: date


@dataclass
class UpdateBookingStatusCommand:
    booking_id: int
    requester_id: int
    is_admin: bool
    status: str


@dataclass
class DeleteBookingCommand:
    booking_id: int
    requester_id: int
    is_admin: bool


@dataclass(frozen=True)
class BookingSummary:
    """What a successful booking creation returns to the caller."""
    id: int
    vehicle_description: str
    start_date: date
    end_date: date
    total_price: Decimal
    status: str

    @classmethod
    def from_booking(cls, booking: Booking) -> 'BookingSummary':
        return cls(
            id=booking.pk,
            vehicle_description=booking.vehicle_description,
            start_date=booking.start_date,
            end_date=booking.end_date,
            total_price=booking.total_price,
            status=booking.status,
        )


def authorize_booking_access(booking: Booking, requester_id, is_admin: bool) -> None:
    """Only the booking owner or an administrator may touch a booking."""
    if is_admin or booking.is_owned_by(requester_id):
        return
    logger.info("User %s denied access to booking %s", requester_id, booking.pk)
    raise ForbiddenError("Not authorized to access this booking.")


# ===== Command Handlers =====

class CreateBookingHandler:
    """
    Handler for CreateBooking command

    Strategy:
    1. Validate the date range before touching storage
    2. Start a unit of work (atomic transaction with a bounded lock wait)
    3. Lock the vehicle row (SELECT FOR UPDATE); concurrent creations for
       the same vehicle queue here, so check and write cannot interleave
    4. Run the overlap detector (ledger blocks, live bookings, open windows)
    5. Price the booking and persist it as CONFIRMED
    6. Append the ledger block that references the booking
    7. Commit; BookingCreated is published after commit
    Lock timeouts are retried with backoff, then reported as TransientError.
    """

    def __init__(self, booking_repo=None, vehicle_repo=None):
        self.booking_repo = booking_repo or BookingRepository()
        self.vehicle_repo = vehicle_repo or VehicleRepository()

    def handle(self, command: CreateBookingCommand) -> Booking:
        dates = DateRange(command.start_date, command.end_date)

        def operation(uow: DjangoUnitOfWork) -> Booking:
            return self._create(command, dates, uow)

        booking = run_atomically(operation)
        logger.info(
            "Booking %s created for vehicle %s, user %s, dates %s, total %s",
            booking.pk,
            booking.vehicle_id,
            booking.user_id,
            dates,
            booking.total_price,
        )
        return booking

    def _create(self, command: CreateBookingCommand, dates: DateRange, uow: DjangoUnitOfWork) -> Booking:
        vehicle = self.vehicle_repo.find_by_id(command.vehicle_id, lock=True)
        if vehicle is None:
            raise NotFoundError(f"Vehicle {command.vehicle_id} not found")

        ensure_vehicle_is_available(
            vehicle,
            dates,
            vehicle_repo=self.vehicle_repo,
            booking_repo=self.booking_repo,
        )

        booking = self.booking_repo.create(
            user_id=command.user_id,
            vehicle=vehicle,
            dates=dates,
            daily_rate=vehicle.price_per_day,
            total_days=chargeable_days(dates),
            total_price=calculate_total_price(dates, vehicle.price_per_day),
            status=DEFAULT_CREATION_STATUS,
        )
        reserve_dates_for_booking(booking, self.vehicle_repo)

        uow.record(BookingCreated(
            aggregate_id=booking.pk,
            booking_id=booking.pk,
            vehicle_id=vehicle.pk,
            user_id=booking.user_id,
            start_date=booking.start_date,
            end_date=booking.end_date,
            total_price=booking.total_price,
        ))
        return booking


class UpdateBookingStatusHandler:
    """
    Handler for status updates

    The transition table decides what is legal. Moving to CANCELED
    removes the booking's ledger block in the same transaction, so the
    dates are immediately bookable again.
    """

    def __init__(self, booking_repo=None, vehicle_repo=None):
        self.booking_repo = booking_repo or BookingRepository()
        self.vehicle_repo = vehicle_repo or VehicleRepository()

    def handle(self, command: UpdateBookingStatusCommand) -> Booking:
        target = BookingStatus.parse(command.status)

        def operation(uow: DjangoUnitOfWork) -> Booking:
            booking = self.booking_repo.find_by_id(command.booking_id, lock=True)
            if booking is None:
                raise NotFoundError(f"Booking {command.booking_id} not found")
            authorize_booking_access(booking, command.requester_id, command.is_admin)

            current = booking.current_status
            if not ensure_transition(current, target):
                return booking

            self.booking_repo.update_status(booking, target)
            released = False
            if not target.blocks_dates:
                released = release_dates_for_booking(booking, self.vehicle_repo)

            uow.record(BookingStatusChanged(
                aggregate_id=booking.pk,
                booking_id=booking.pk,
                vehicle_id=booking.vehicle_id,
                old_status=current.value,
                new_status=target.value,
                changed_by=command.requester_id,
                ledger_released=released,
            ))
            logger.info(
                "Booking %s status %s -> %s by user %s",
                booking.pk,
                current.value,
                target.value,
                command.requester_id,
            )
            return booking

        return run_atomically(operation)


class CancelBookingHandler(UpdateBookingStatusHandler):
    """Shorthand for a status update to CANCELED."""

    def cancel(self, booking_id, requester_id, is_admin: bool) -> Booking:
        return self.handle(UpdateBookingStatusCommand(
            booking_id=booking_id,
            requester_id=requester_id,
            is_admin=is_admin,
            status=BookingStatus.CANCELED.value,
        ))


class DeleteBookingHandler:
    """
    Handler for hard deletion

    The ledger block is removed by its booking reference, never by
    matching dates, so entries edited independently are still found and
    unrelated entries are never touched. A missing block is logged and
    the deletion proceeds.
    """

    def __init__(self, booking_repo=None, vehicle_repo=None):
        self.booking_repo = booking_repo or BookingRepository()
        self.vehicle_repo = vehicle_repo or VehicleRepository()

    def handle(self, command: DeleteBookingCommand) -> None:
        def operation(uow: DjangoUnitOfWork) -> None:
            booking = self.booking_repo.find_by_id(command.booking_id, lock=True)
            if booking is None:
                raise NotFoundError(f"Booking {command.booking_id} not found")
            authorize_booking_access(booking, command.requester_id, command.is_admin)

            booking_id, vehicle_id = booking.pk, booking.vehicle_id
            released = release_dates_for_booking(booking, self.vehicle_repo)
            self.booking_repo.delete(booking)

            uow.record(BookingDeleted(
                aggregate_id=booking_id,
                booking_id=booking_id,
                vehicle_id=vehicle_id,
                deleted_by=command.requester_id,
                ledger_released=released,
            ))
            logger.info("Booking %s deleted by user %s", booking_id, command.requester_id)

        run_atomically(operation)


class GetBookingHandler:
    """Read a single booking with owner-or-admin authorization."""

    def __init__(self, booking_repo=None):
        self.booking_repo = booking_repo or BookingRepository()

    def handle(self, booking_id, requester_id, is_admin: bool) -> Booking:
        booking = self.booking_repo.find_by_id(booking_id)
        if booking is None:
            raise NotFoundError(f"Booking {booking_id} not found")
        authorize_booking_access(booking, requester_id, is_admin)
        return booking

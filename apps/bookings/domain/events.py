"""
Booking Domain Events

Published through the message bus after the producing transaction
commits.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from shared.domain.base import DomainEvent


@dataclass(frozen=True)
class BookingCreated(DomainEvent):
    booking_id: int
    vehicle_id: int
    user_id: int
    start_date: date
    end_date: date
    total_price: Decimal


@dataclass(frozen=True)
class BookingStatusChanged(DomainEvent):
    booking_id: int
    vehicle_id: int
    old_status: str
    new_status: str
    changed_by: int
    ledger_released: bool = False


@dataclass(frozen=True)
class BookingDeleted(DomainEvent):
    booking_id: int
    vehicle_id: int
    deleted_by: int
    ledger_released: bool

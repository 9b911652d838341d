"""
Booking Status State Machine

State transitions:
- PENDING -> CONFIRMED
- PENDING -> CANCELED
- CONFIRMED -> CANCELED
CANCELED is terminal. New bookings start as CONFIRMED; nothing moves
a booking between states except an explicit status update.
"""

from enum import Enum

from shared.domain.exceptions import InvalidInputError, InvalidTransitionError


class BookingStatus(str, Enum):
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    CANCELED = 'canceled'

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def blocks_dates(self) -> bool:
        return self is not BookingStatus.CANCELED

    @classmethod
    def parse(cls, value) -> 'BookingStatus':
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(status.value for status in cls)
            raise InvalidInputError(f"Unknown booking status '{value}'. Expected one of: {allowed}")


DEFAULT_CREATION_STATUS = BookingStatus.CONFIRMED

TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.CANCELED}),
    BookingStatus.CANCELED: frozenset(),
}


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    return target in TRANSITIONS[current]


def ensure_transition(current: BookingStatus, target: BookingStatus) -> bool:
    """
    Validate a status change.

    Returns False when `target` equals `current` (nothing to do) and True
    for a legal transition. Raises InvalidTransitionError otherwise.
    """
    if current == target:
        return False
    if not can_transition(current, target):
        raise InvalidTransitionError(
            f"Cannot change booking status from {current.value} to {target.value}"
        )
    return True

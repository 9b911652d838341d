"""
Overlap Detector

Pure availability rules over in-memory ledger entries and bookings.
`apps.bookings.services` runs the same rules as ORM queries; both must
agree on what counts as a conflict.

A candidate range is rejected when any of these holds:
1. an unavailable ledger entry overlaps it,
2. a non-canceled booking overlaps it,
3. the vehicle declares open windows and none of them covers it.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Protocol

from shared.domain.value_objects import DateRange

from .status import BookingStatus


class LedgerEntry(Protocol):
    start_date: date
    end_date: date
    is_available: bool


class BookedRange(Protocol):
    start_date: date
    end_date: date
    status: str


def ranges_overlap(start1: date, end1: date, start2: date, end2: date) -> bool:
    """Inclusive-inclusive intersection test."""
    return start1 <= end2 and end1 >= start2


@dataclass(frozen=True)
class Conflict:
    """Why a candidate range was rejected."""

    source: str  # "ledger", "booking" or "window"
    start_date: date | None = None
    end_date: date | None = None

    def describe(self) -> str:
        if self.source == "window":
            return "The selected dates are outside the vehicle's availability windows."
        if self.source == "ledger":
            return f"The vehicle is blocked from {self.start_date} to {self.end_date}."
        return f"The vehicle is already booked from {self.start_date} to {self.end_date}."


def find_conflict(
    candidate: DateRange,
    periods: Iterable[LedgerEntry] = (),
    bookings: Iterable[BookedRange] = (),
) -> Optional[Conflict]:
    """Return the first reason `candidate` cannot be booked, or None."""
    periods = list(periods)

    for period in periods:
        if not period.is_available and ranges_overlap(
            candidate.start_date, candidate.end_date, period.start_date, period.end_date
        ):
            return Conflict("ledger", period.start_date, period.end_date)

    for booking in bookings:
        if not BookingStatus(booking.status).blocks_dates:
            continue
        if ranges_overlap(candidate.start_date, candidate.end_date, booking.start_date, booking.end_date):
            return Conflict("booking", booking.start_date, booking.end_date)

    windows = [DateRange(p.start_date, p.end_date) for p in periods if p.is_available]
    if windows and not any(window.covers(candidate) for window in windows):
        return Conflict("window")

    return None


def conflicts(
    candidate: DateRange,
    periods: Iterable[LedgerEntry] = (),
    bookings: Iterable[BookedRange] = (),
) -> bool:
    return find_conflict(candidate, periods, bookings) is not None

"""
Common Value Objects

- DateRange: a closed range of calendar days (rental start to rental end)
"""

from dataclasses import dataclass
from datetime import date

from shared.domain.base import ValueObject
from shared.domain.exceptions import InvalidInputError


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Date range value object

    Represents a range from start_date to end_date, both inclusive.
    A single-day rental has start_date == end_date.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        if not isinstance(self.start_date, date) or not isinstance(self.end_date, date):
            raise InvalidInputError("Start and end dates are required")
        if self.start_date > self.end_date:
            raise InvalidInputError(
                f"Start date ({self.start_date}) must not be after end date ({self.end_date})"
            )

    @classmethod
    def parse(cls, start: str, end: str) -> 'DateRange':
        """Build a range from ISO 8601 (YYYY-MM-DD) strings."""
        try:
            return cls(date.fromisoformat(start), date.fromisoformat(end))
        except (TypeError, ValueError) as exc:
            if isinstance(exc, InvalidInputError):
                raise
            raise InvalidInputError("Invalid date format. Use YYYY-MM-DD.") from exc

    def overlaps_with(self, other: 'DateRange') -> bool:
        """
        Check if this range overlaps with another

        Both ends are inclusive, so a range ending on the day another
        starts overlaps it.

        Examples:
            - DateRange(25, 28) overlaps with DateRange(27, 30) -> True
            - DateRange(25, 28) overlaps with DateRange(28, 31) -> True
            - DateRange(25, 28) overlaps with DateRange(29, 31) -> False
        """
        if not isinstance(other, DateRange):
            raise TypeError("Can only check overlap with another DateRange")
        return self.start_date <= other.end_date and self.end_date >= other.start_date

    def covers(self, other: 'DateRange') -> bool:
        """True if `other` lies entirely inside this range."""
        return self.start_date <= other.start_date and self.end_date >= other.end_date

    @property
    def days(self) -> int:
        """Whole days between start and end (0 for a single-day range)."""
        return (self.end_date - self.start_date).days

    def __str__(self):
        return f"{self.start_date.isoformat()} - {self.end_date.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.end_date})"

"""
Pricing Calculator

total = chargeable days x daily rate, where chargeable days is the
number of whole days between start and end, and at least one day for a
same-day rental. The price is a snapshot taken when the booking is
created and is never recomputed.
"""

from decimal import ROUND_HALF_UP, Decimal

from shared.domain.exceptions import InvalidInputError
from shared.domain.value_objects import DateRange

MIN_CHARGEABLE_DAYS = 1
CENTS = Decimal("0.01")


def chargeable_days(dates: DateRange) -> int:
    return max(dates.days, MIN_CHARGEABLE_DAYS)


def calculate_total_price(dates: DateRange, daily_rate) -> Decimal:
    rate = Decimal(str(daily_rate))
    if rate < 0:
        raise InvalidInputError("Daily rate cannot be negative")
    return (rate * chargeable_days(dates)).quantize(CENTS, rounding=ROUND_HALF_UP)

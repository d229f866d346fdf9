"""
Calendar helpers shared by models and aggregations.

Months are identified by their English calendar name ("January" ...
"December"), which is also how goals persist them.
"""

import math
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Callable, Union


class Month(str, Enum):
    """Calendar months, in calendar order."""
    JANUARY = "January"
    FEBRUARY = "February"
    MARCH = "March"
    APRIL = "April"
    MAY = "May"
    JUNE = "June"
    JULY = "July"
    AUGUST = "August"
    SEPTEMBER = "September"
    OCTOBER = "October"
    NOVEMBER = "November"
    DECEMBER = "December"

    @property
    def number(self) -> int:
        """1-based month index (January = 1)."""
        return list(Month).index(self) + 1

    @classmethod
    def from_number(cls, number: int) -> "Month":
        if not 1 <= number <= 12:
            raise ValueError(f"Month number out of range: {number}")
        return list(cls)[number - 1]

    @classmethod
    def of(cls, value: Union["Month", str, date]) -> "Month":
        """Coerce a month name or a date into a Month."""
        if isinstance(value, Month):
            return value
        if isinstance(value, date):
            return cls.from_number(value.month)
        return cls(value)


Clock = Callable[[], datetime]


def current_month_year(clock: Clock = datetime.now) -> tuple[Month, int]:
    """Return (month, year) for the clock's current local time."""
    now = clock()
    return Month.from_number(now.month), now.year


def js_round(value: Union[Decimal, float, int]) -> int:
    """
    Round half up towards positive infinity.

    -2.5 rounds to -2 and 2.5 to 3, unlike the built-in round().
    """
    return math.floor(Decimal(str(value)) + Decimal("0.5"))

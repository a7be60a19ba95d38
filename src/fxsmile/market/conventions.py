"""
Day count conventions.

Converts a pair of calendar dates into a year fraction, the time measure
used to index smile pillars:
- Actual conventions (ACT/360, ACT/365F, ACT/365L, ACT/ACT ISDA)
- 30/360 conventions (US bond basis, European)
"""

from __future__ import annotations

from datetime import date
from enum import Enum

from fxsmile.errors import DomainError, InvalidInputError


class DayCountConvention(Enum):
    """
    Standard day count conventions used in FX option markets.

    References:
        - ISDA definitions
    """

    ACT_360 = "ACT/360"            # Actual/360 (money market)
    ACT_365F = "ACT/365F"          # Actual/365 Fixed
    ACT_365L = "ACT/365L"          # Actual/365 (Leap year aware)
    ACT_ACT_ISDA = "ACT/ACT ISDA"  # Actual/Actual (ISDA)
    THIRTY_360 = "30/360"          # 30/360 (Bond basis, US)
    THIRTY_E_360 = "30E/360"       # European 30/360

    @classmethod
    def of(cls, name: "str | DayCountConvention") -> "DayCountConvention":
        """Resolve a convention from its enum member or its market name."""
        if isinstance(name, cls):
            return name
        key = str(name).strip().upper()
        for member in cls:
            if member.value == key or member.name == key:
                return member
        raise InvalidInputError(f"Unsupported day count convention: {name!r}")

    def year_fraction(self, start_date: date, end_date: date) -> float:
        """Year fraction between two dates under this convention."""
        return year_fraction(start_date, end_date, self)


def year_fraction(
    start_date: date,
    end_date: date,
    convention: DayCountConvention = DayCountConvention.ACT_365F
) -> float:
    """
    Calculate year fraction between two dates using specified day count convention.

    Args:
        start_date: Start date
        end_date: End date
        convention: Day count convention to use

    Returns:
        Year fraction as float

    Raises:
        DomainError: If ``end_date`` precedes ``start_date``

    Example:
        >>> from datetime import date
        >>> yf = year_fraction(date(2015, 2, 17), date(2016, 6, 17), DayCountConvention.ACT_365F)
        >>> abs(yf - 486 / 365) < 1e-15
        True
    """
    if end_date < start_date:
        raise DomainError(f"end_date {end_date} must not precede start_date {start_date}")

    if convention == DayCountConvention.ACT_365F:
        return (end_date - start_date).days / 365.0

    elif convention == DayCountConvention.ACT_365L:
        days = (end_date - start_date).days
        # Leap year aware: use 366 if the period touches a leap year
        if _is_leap_year(start_date.year) or (
            start_date.year != end_date.year and _is_leap_year(end_date.year)
        ):
            return days / 366.0
        return days / 365.0

    elif convention == DayCountConvention.ACT_360:
        return (end_date - start_date).days / 360.0

    elif convention == DayCountConvention.ACT_ACT_ISDA:
        # Split the period at each 1 January
        total_fraction = 0.0
        current = start_date
        while current < end_date:
            next_year = date(current.year + 1, 1, 1)
            period_end = min(end_date, next_year)
            days_in_year = 366 if _is_leap_year(current.year) else 365
            total_fraction += (period_end - current).days / days_in_year
            current = period_end
        return total_fraction

    elif convention == DayCountConvention.THIRTY_360:
        return _thirty_360_us(start_date, end_date)

    elif convention == DayCountConvention.THIRTY_E_360:
        return _thirty_e_360(start_date, end_date)

    raise InvalidInputError(f"Unsupported day count convention: {convention}")


def _is_leap_year(year: int) -> bool:
    """Check if year is a leap year."""
    return (year % 4 == 0 and year % 100 != 0) or (year % 400 == 0)


def _thirty_360_us(start_date: date, end_date: date) -> float:
    """
    30/360 (US) day count calculation.

    Convention:
    - Treats all months as having 30 days
    - Adjusts day 31 to 30
    """
    y1, m1, d1 = start_date.year, start_date.month, start_date.day
    y2, m2, d2 = end_date.year, end_date.month, end_date.day

    if d1 == 31:
        d1 = 30
    if d2 == 31 and d1 >= 30:
        d2 = 30

    return ((y2 - y1) * 360 + (m2 - m1) * 30 + (d2 - d1)) / 360.0


def _thirty_e_360(start_date: date, end_date: date) -> float:
    """
    30E/360 (European) day count calculation.

    Convention:
    - Day 31 is always adjusted to 30
    """
    y1, m1, d1 = start_date.year, start_date.month, start_date.day
    y2, m2, d2 = end_date.year, end_date.month, end_date.day

    if d1 == 31:
        d1 = 30
    if d2 == 31:
        d2 = 30

    return ((y2 - y1) * 360 + (m2 - m1) * 30 + (d2 - d1)) / 360.0


__all__ = ["DayCountConvention", "year_fraction"]

"""Calendar unit boundaries.

Aligns an instant to the start of its enclosing calendar unit and reports
unit lengths used to bounds-check calendar indexes. All arithmetic is
wall-clock arithmetic in the instant's own timezone.
"""

import calendar
from datetime import date, datetime, time, timedelta
from typing import Literal, TypeAlias

from dateutil.relativedelta import relativedelta

Unit: TypeAlias = Literal[
    "year",
    "iso_year",
    "semester",
    "quarter",
    "month",
    "iso_week",
    "day",
    "hour",
    "minute",
    "second",
]

_UNIT_DURATION: dict[Unit, relativedelta] = {
    "year": relativedelta(years=1),
    "semester": relativedelta(months=6),
    "quarter": relativedelta(months=3),
    "month": relativedelta(months=1),
    "iso_week": relativedelta(weeks=1),
    "day": relativedelta(days=1),
    "hour": relativedelta(hours=1),
    "minute": relativedelta(minutes=1),
    "second": relativedelta(seconds=1),
}

# How many units fit in the enclosing unit, when that never varies
_FIXED_LENGTH: dict[Unit, int] = {
    "semester": 2,
    "quarter": 4,
    "month": 12,
    "hour": 24,
    "minute": 60,
    "second": 60,
}


def _check_unit(unit: str) -> None:
    if unit not in _UNIT_DURATION and unit != "iso_year":
        valid = ", ".join(["iso_year", *_UNIT_DURATION])
        raise ValueError(f"Invalid calendar unit '{unit}'. Valid units: {valid}")


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def iso_weeks_in_year(year: int) -> int:
    """Number of ISO 8601 weeks (52 or 53) in the given ISO year."""
    # December 28th always falls in the last ISO week of its year
    return date(year, 12, 28).isocalendar()[1]


def _midnight(day: date, like: datetime) -> datetime:
    return datetime.combine(day, time.min, tzinfo=like.tzinfo)


def start_of(instant: datetime, unit: Unit) -> datetime:
    """Return the first instant of the calendar unit containing ``instant``."""
    _check_unit(unit)
    if unit == "second":
        return instant.replace(microsecond=0)
    if unit == "minute":
        return instant.replace(second=0, microsecond=0)
    if unit == "hour":
        return instant.replace(minute=0, second=0, microsecond=0)
    if unit == "day":
        return _midnight(instant.date(), instant)
    if unit == "iso_week":
        return _midnight(instant.date() - timedelta(days=instant.weekday()), instant)
    if unit == "iso_year":
        iso_year = instant.isocalendar()[0]
        return _midnight(date.fromisocalendar(iso_year, 1, 1), instant)

    # Month-based units: month, quarter, semester, year
    months_per_unit = {"month": 1, "quarter": 3, "semester": 6, "year": 12}[unit]
    first_month = (instant.month - 1) // months_per_unit * months_per_unit + 1
    return _midnight(date(instant.year, first_month, 1), instant)


def unit_duration(unit: Unit, start: datetime | None = None) -> relativedelta:
    """Return the calendar length of ``unit``.

    ISO years hold either 52 or 53 weeks, so ``iso_year`` needs the aligned
    ``start`` of the year being measured.
    """
    _check_unit(unit)
    if unit == "iso_year":
        if start is None:
            raise ValueError("unit_duration('iso_year') requires a start instant")
        return relativedelta(weeks=iso_weeks_in_year(start.isocalendar()[0]))
    return _UNIT_DURATION[unit]


def unit_length(unit: Unit, reference: datetime) -> int:
    """Number of ``unit`` in the enclosing calendar unit around ``reference``.

    - iso_week: ISO weeks in the reference's ISO year (52 or 53)
    - day: days in the reference's month (28 to 31)
    - month: 12, quarter: 4, semester: 2 (per year)
    - hour: 24, minute: 60, second: 60
    """
    _check_unit(unit)
    if unit == "iso_week":
        return iso_weeks_in_year(reference.isocalendar()[0])
    if unit == "day":
        return days_in_month(reference.year, reference.month)
    if unit in _FIXED_LENGTH:
        return _FIXED_LENGTH[unit]
    raise ValueError(f"Calendar unit '{unit}' has no enclosing unit")


__all__ = [
    "Unit",
    "start_of",
    "unit_duration",
    "unit_length",
    "days_in_month",
    "iso_weeks_in_year",
]

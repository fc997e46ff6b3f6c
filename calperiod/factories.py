"""Calendar-aligned interval constructors.

Each factory resolves a reference instant, aligns it to the start of a
calendar unit and spans one unit from there. Year-based factories take
either an ``int`` year (plus a unit index) or any datepoint; ``hour``,
``minute`` and ``second`` only take datepoints, so ints are timestamps.

Example:
    >>> from calperiod import month, iso_week
    >>> str(month(2018, 2))
    '[2018-02-01T00:00:00.000000Z, 2018-03-01T00:00:00.000000Z)'
    >>> iso_week(2018, 60)
    Traceback (most recent call last):
    ...
    calperiod.errors.OutOfRange: ISO week index 60 is out of range for 2018.
    Valid range: 1 to 52
"""

import logging
from datetime import datetime, timedelta, tzinfo

from calperiod.boundary import BoundaryType
from calperiod.datepoint import Datepoint, DurationLike, datepoint, zone
from calperiod.errors import OutOfRange
from calperiod.interval import Interval
from calperiod.units import (
    Unit,
    days_in_month,
    iso_weeks_in_year,
    start_of,
    unit_duration,
)
from calperiod.util import DEFAULT_BOUNDARY

log = logging.getLogger(__name__)

Tz = str | tzinfo | None
Boundary = BoundaryType | str

_DEFAULT = BoundaryType(DEFAULT_BOUNDARY)


def _aligned(reference: datetime, unit: Unit, boundary_type: Boundary) -> Interval:
    start = start_of(reference, unit)
    try:
        end = start + unit_duration(unit, start)
    except (ValueError, OverflowError) as exc:
        raise OutOfRange(
            f"The {unit} starting at {start.isoformat()} ends outside the "
            f"supported calendar range"
        ) from exc
    log.debug("aligned %s to %s start %s", reference.isoformat(), unit, start.isoformat())
    return Interval(start, end, boundary_type)


def _check_index(name: str, index: int, upper: int, scope: str = "") -> int:
    if isinstance(index, bool) or not isinstance(index, int) or not 1 <= index <= upper:
        raise OutOfRange(
            f"{name} index {index!r} is out of range{scope}.\n"
            f"Valid range: 1 to {upper}"
        )
    return index


def _first_day(year: int, month: int, tz: Tz, day: int = 1) -> datetime:
    try:
        return datetime(year, month, day, tzinfo=zone(tz))
    except ValueError as exc:
        raise OutOfRange(f"Year {year!r} is out of range.\nValid range: 1 to 9999") from exc


def year(
    year_or_datepoint: int | Datepoint,
    *,
    tz: Tz = None,
    boundary_type: Boundary = _DEFAULT,
) -> Interval:
    """Return the calendar year containing a datepoint, or the given year."""
    if isinstance(year_or_datepoint, int) and not isinstance(year_or_datepoint, bool):
        reference = _first_day(year_or_datepoint, 1, tz)
    else:
        reference = datepoint(year_or_datepoint, tz)
    return _aligned(reference, "year", boundary_type)


def iso_year(
    year_or_datepoint: int | Datepoint,
    *,
    tz: Tz = None,
    boundary_type: Boundary = _DEFAULT,
) -> Interval:
    """Return the ISO 8601 year (Monday of week 1 to Monday of next week 1)."""
    if isinstance(year_or_datepoint, int) and not isinstance(year_or_datepoint, bool):
        # January 4th always falls in ISO week 1 of its year
        reference = _first_day(year_or_datepoint, 1, tz, day=4)
    else:
        reference = datepoint(year_or_datepoint, tz)
    return _aligned(reference, "iso_year", boundary_type)


def semester(
    year_or_datepoint: int | Datepoint,
    index: int = 1,
    *,
    tz: Tz = None,
    boundary_type: Boundary = _DEFAULT,
) -> Interval:
    """Return a half year: index 1 is January-June, index 2 July-December."""
    if isinstance(year_or_datepoint, int) and not isinstance(year_or_datepoint, bool):
        index = _check_index("Semester", index, 2)
        reference = _first_day(year_or_datepoint, (index - 1) * 6 + 1, tz)
    else:
        reference = datepoint(year_or_datepoint, tz)
    return _aligned(reference, "semester", boundary_type)


def quarter(
    year_or_datepoint: int | Datepoint,
    index: int = 1,
    *,
    tz: Tz = None,
    boundary_type: Boundary = _DEFAULT,
) -> Interval:
    """Return a quarter of a year, index 1 to 4."""
    if isinstance(year_or_datepoint, int) and not isinstance(year_or_datepoint, bool):
        index = _check_index("Quarter", index, 4)
        reference = _first_day(year_or_datepoint, (index - 1) * 3 + 1, tz)
    else:
        reference = datepoint(year_or_datepoint, tz)
    return _aligned(reference, "quarter", boundary_type)


def month(
    year_or_datepoint: int | Datepoint,
    index: int = 1,
    *,
    tz: Tz = None,
    boundary_type: Boundary = _DEFAULT,
) -> Interval:
    """Return a calendar month, index 1 to 12."""
    if isinstance(year_or_datepoint, int) and not isinstance(year_or_datepoint, bool):
        index = _check_index("Month", index, 12)
        reference = _first_day(year_or_datepoint, index, tz)
    else:
        reference = datepoint(year_or_datepoint, tz)
    return _aligned(reference, "month", boundary_type)


def iso_week(
    year_or_datepoint: int | Datepoint,
    index: int = 1,
    *,
    tz: Tz = None,
    boundary_type: Boundary = _DEFAULT,
) -> Interval:
    """Return an ISO 8601 week, Monday to Monday.

    With an int year the index must not exceed the year's last ISO week,
    which is 52 or 53.
    """
    if isinstance(year_or_datepoint, int) and not isinstance(year_or_datepoint, bool):
        year_start = iso_year(year_or_datepoint, tz=tz).start
        index = _check_index(
            "ISO week",
            index,
            iso_weeks_in_year(year_or_datepoint),
            scope=f" for {year_or_datepoint}",
        )
        reference = year_start + timedelta(weeks=index - 1)
    else:
        reference = datepoint(year_or_datepoint, tz)
    return _aligned(reference, "iso_week", boundary_type)


def day(
    year_or_datepoint: int | Datepoint,
    month: int = 1,
    day: int = 1,
    *,
    tz: Tz = None,
    boundary_type: Boundary = _DEFAULT,
) -> Interval:
    """Return a full day starting at midnight in the datepoint's timezone."""
    if isinstance(year_or_datepoint, int) and not isinstance(year_or_datepoint, bool):
        month = _check_index("Month", month, 12)
        first = _first_day(year_or_datepoint, month, tz)
        day = _check_index(
            "Day",
            day,
            days_in_month(first.year, first.month),
            scope=f" for {first.year}-{first.month:02d}",
        )
        reference = first.replace(day=day)
    else:
        reference = datepoint(year_or_datepoint, tz)
    return _aligned(reference, "day", boundary_type)


def hour(
    point: Datepoint, *, tz: Tz = None, boundary_type: Boundary = _DEFAULT
) -> Interval:
    """Return the hour containing ``point``."""
    return _aligned(datepoint(point, tz), "hour", boundary_type)


def minute(
    point: Datepoint, *, tz: Tz = None, boundary_type: Boundary = _DEFAULT
) -> Interval:
    """Return the minute containing ``point``."""
    return _aligned(datepoint(point, tz), "minute", boundary_type)


def second(
    point: Datepoint, *, tz: Tz = None, boundary_type: Boundary = _DEFAULT
) -> Interval:
    """Return the second containing ``point``."""
    return _aligned(datepoint(point, tz), "second", boundary_type)


def instant(
    point: Datepoint, *, tz: Tz = None, boundary_type: Boundary = _DEFAULT
) -> Interval:
    """Return the zero-length interval at ``point``."""
    point = datepoint(point, tz)
    return Interval(point, point, boundary_type)


def interval_after(
    point: Datepoint,
    length: DurationLike,
    *,
    tz: Tz = None,
    boundary_type: Boundary = _DEFAULT,
) -> Interval:
    """Return the interval starting at ``point`` and lasting ``length``."""
    return Interval.from_duration(datepoint(point, tz), length, boundary_type)


def interval_before(
    point: Datepoint,
    length: DurationLike,
    *,
    tz: Tz = None,
    boundary_type: Boundary = _DEFAULT,
) -> Interval:
    """Return the interval ending at ``point`` and lasting ``length``."""
    return Interval.from_duration_before_end(datepoint(point, tz), length, boundary_type)


def interval_around(
    point: Datepoint,
    length: DurationLike,
    *,
    tz: Tz = None,
    boundary_type: Boundary = _DEFAULT,
) -> Interval:
    """Return the interval reaching ``length`` on both sides of ``point``."""
    return Interval.around(datepoint(point, tz), length, boundary_type)


__all__ = [
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
    "instant",
    "interval_after",
    "interval_before",
    "interval_around",
]

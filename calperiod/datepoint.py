"""Resolution of loosely-typed inputs into instants and durations.

Every public entry point of calperiod accepts "datepoint-like" and
"duration-like" values. This module is the only place that interprets
them; the interval algebra itself only ever sees aware ``datetime``
instants and ``relativedelta`` durations.
"""

import re
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import TYPE_CHECKING, Any, TypeAlias
from zoneinfo import ZoneInfo

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from calperiod.errors import InvalidInput
from calperiod.util import DEFAULT_TZ

if TYPE_CHECKING:
    from calperiod.interval import Interval

Datepoint: TypeAlias = datetime | date | int | float | str
DurationLike: TypeAlias = "relativedelta | timedelta | int | float | str | Interval"

_TIMESTAMP = re.compile(r"[-+]?\d+")

_ISO_DURATION = re.compile(
    r"(?P<sign>[-+])?P"
    r"(?:(?P<years>\d+)Y)?"
    r"(?:(?P<months>\d+)M)?"
    r"(?:(?P<weeks>\d+)W)?"
    r"(?:(?P<days>\d+)D)?"
    r"(?:T(?=\d)"
    r"(?:(?P<hours>\d+)H)?"
    r"(?:(?P<minutes>\d+)M)?"
    r"(?:(?P<seconds>\d+)(?:[.,](?P<fraction>\d{1,6}))?S)?"
    r")?",
    re.IGNORECASE,
)

_RELATIVE_PART = (
    r"([-+]?\d+)\s*"
    r"(years?|months?|fortnights?|weeks?|days?|hours?|minutes?|mins?"
    r"|seconds?|secs?|microseconds?|usecs?)"
)
_RELATIVE_PHRASE = re.compile(rf"\s*{_RELATIVE_PART}(?:\s+{_RELATIVE_PART})*\s*", re.I)
_RELATIVE_TOKEN = re.compile(_RELATIVE_PART, re.IGNORECASE)

# Relative phrase unit -> (relativedelta keyword, multiplier)
_RELATIVE_UNITS: dict[str, tuple[str, int]] = {
    "year": ("years", 1),
    "month": ("months", 1),
    "fortnight": ("weeks", 2),
    "week": ("weeks", 1),
    "day": ("days", 1),
    "hour": ("hours", 1),
    "minute": ("minutes", 1),
    "min": ("minutes", 1),
    "second": ("seconds", 1),
    "sec": ("seconds", 1),
    "microsecond": ("microseconds", 1),
    "usec": ("microseconds", 1),
}


def zone(tz: str | tzinfo | None = None) -> tzinfo:
    """Return the tzinfo for an IANA name, falling back to the default zone."""
    if isinstance(tz, tzinfo):
        return tz
    name = tz or DEFAULT_TZ
    if name == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ValueError, LookupError) as exc:
        raise InvalidInput(
            f"Unknown timezone {name!r}.\n"
            f"Hint: Use an IANA name such as 'UTC', 'Europe/Paris' or 'US/Pacific'"
        ) from exc


def datepoint(value: Datepoint, tz: str | tzinfo | None = None) -> datetime:
    """Convert a datepoint-like value to a timezone-aware datetime.

    Accepts:
    - datetime: aware values pass through, naive ones are read in ``tz``
    - date: midnight of that day in ``tz``
    - int / float / digit-only string: Unix timestamp, in UTC
    - str: anything dateutil's parser understands, read in ``tz`` when naive

    Raises:
        InvalidInput: If the value cannot be interpreted as an instant
    """
    if isinstance(value, datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            return value.replace(tzinfo=zone(tz))
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=zone(tz))
    if isinstance(value, bool):
        raise _datepoint_error(value)
    if isinstance(value, (int, float)):
        return _from_timestamp(value)
    if isinstance(value, str):
        text = value.strip()
        if _TIMESTAMP.fullmatch(text):
            return _from_timestamp(int(text))
        try:
            parsed = date_parser.parse(text)
        except (ValueError, OverflowError) as exc:
            raise InvalidInput(
                f"Cannot parse {value!r} as a datepoint.\n"
                f"Examples: '2015-01-31', '2015-01-31 08:30:00', "
                f"'2015-01-31T08:30:00+02:00', '1422662400'"
            ) from exc
        return datepoint(parsed, tz)
    raise _datepoint_error(value)


def _from_timestamp(value: int | float) -> datetime:
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc)
    except (ValueError, OverflowError, OSError) as exc:
        raise InvalidInput(f"Timestamp {value!r} is out of range") from exc


def _datepoint_error(value: Any) -> InvalidInput:
    return InvalidInput(
        f"A datepoint must be a datetime, date, int, float or str.\n"
        f"Got {type(value).__name__!r}: {value!r}"
    )


def duration(value: DurationLike) -> relativedelta:
    """Convert a duration-like value to a relativedelta.

    Accepts:
    - relativedelta: returned as is
    - timedelta: converted field by field
    - Interval: the interval's own duration
    - int / float / digit-only string: a number of seconds
    - ISO 8601 duration string: 'P1Y2M', 'P2W', 'PT1.5S', '-P1D'
    - relative phrase: '1 HOUR', '+1 day', '5 YEARS', '2 weeks 3 days'

    Raises:
        InvalidInput: If the value cannot be interpreted as a duration
    """
    # Import at runtime to avoid circular dependency
    from calperiod.interval import Interval

    if isinstance(value, relativedelta):
        return value
    if isinstance(value, timedelta):
        return relativedelta(
            days=value.days, seconds=value.seconds, microseconds=value.microseconds
        )
    if isinstance(value, Interval):
        return value.duration()
    if isinstance(value, bool):
        raise _duration_error(value)
    if isinstance(value, int):
        return relativedelta(seconds=value)
    if isinstance(value, float):
        whole = int(value)
        return relativedelta(seconds=whole, microseconds=round((value - whole) * 1e6))
    if isinstance(value, str):
        return _parse_duration(value)
    raise _duration_error(value)


def _parse_duration(value: str) -> relativedelta:
    text = value.strip()
    if _TIMESTAMP.fullmatch(text):
        return relativedelta(seconds=int(text))

    iso = _ISO_DURATION.fullmatch(text)
    if iso and any(
        iso.group(name) is not None
        for name in ("years", "months", "weeks", "days", "hours", "minutes", "seconds")
    ):
        fields = {
            name: int(iso.group(name))
            for name in ("years", "months", "weeks", "days", "hours", "minutes", "seconds")
            if iso.group(name) is not None
        }
        if iso.group("fraction"):
            fields["microseconds"] = int(iso.group("fraction").ljust(6, "0"))
        result = relativedelta(**fields)
        return -result if iso.group("sign") == "-" else result

    if _RELATIVE_PHRASE.fullmatch(text):
        parts: dict[str, int] = {}
        for amount, unit in _RELATIVE_TOKEN.findall(text):
            unit = unit.lower()
            key, factor = _RELATIVE_UNITS[unit[:-1] if unit.endswith("s") else unit]
            parts[key] = parts.get(key, 0) + int(amount) * factor
        return relativedelta(**parts)

    raise InvalidInput(
        f"Cannot parse {value!r} as a duration.\n"
        f"Examples: 3600, 'PT1H', 'P1M', '1 HOUR', '+2 days', '1 week 3 days'"
    )


def _duration_error(value: Any) -> InvalidInput:
    return InvalidInput(
        f"A duration must be a relativedelta, timedelta, Interval, int, float or str.\n"
        f"Got {type(value).__name__!r}: {value!r}"
    )


def is_positive(step: relativedelta, anchor: datetime) -> bool:
    """True if adding ``step`` to ``anchor`` moves forward in time."""
    return anchor + step > anchor


__all__ = ["Datepoint", "DurationLike", "zone", "datepoint", "duration", "is_positive"]

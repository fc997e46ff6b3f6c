import logging

from .boundary import BoundaryType
from .datepoint import datepoint, duration
from .errors import (
    CalperiodError,
    DisjointIntervals,
    InvalidInput,
    InvalidRange,
    OutOfBounds,
    OutOfRange,
    OverlappingIntervals,
)
from .factories import (
    day,
    hour,
    instant,
    interval_after,
    interval_around,
    interval_before,
    iso_week,
    iso_year,
    minute,
    month,
    quarter,
    second,
    semester,
    year,
)
from .interval import Interval
from .sequence import IntervalSequence, by_start
from .units import days_in_month, iso_weeks_in_year, start_of, unit_duration, unit_length
from .util import DAY, HOUR, MINUTE, SECOND, WEEK

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Interval",
    "IntervalSequence",
    "BoundaryType",
    "by_start",
    "datepoint",
    "duration",
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
    "start_of",
    "unit_duration",
    "unit_length",
    "days_in_month",
    "iso_weeks_in_year",
    "CalperiodError",
    "InvalidRange",
    "OutOfRange",
    "DisjointIntervals",
    "OverlappingIntervals",
    "OutOfBounds",
    "InvalidInput",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "WEEK",
]

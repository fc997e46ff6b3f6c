"""Exception hierarchy for calperiod.

All calperiod exceptions inherit from CalperiodError. Each one also derives
from the builtin exception a caller would naturally expect, so
``except ValueError`` or ``except IndexError`` keep working.
"""


class CalperiodError(Exception):
    """Base exception for all calperiod errors."""


class InvalidRange(CalperiodError, ValueError):
    """An interval was built with its start after its end."""


class OutOfRange(CalperiodError, ValueError):
    """A calendar index is outside the unit's valid range.

    Examples:
        - month 13
        - semester 0
        - ISO week 53 in a year with 52 ISO weeks
        - February 30th
    """


class DisjointIntervals(CalperiodError, ValueError):
    """An operation that needs overlapping intervals got disjoint ones."""


class OverlappingIntervals(CalperiodError, ValueError):
    """A gap was requested between intervals that overlap."""


class OutOfBounds(CalperiodError, IndexError):
    """A sequence index is outside ``[0, len)``."""


class InvalidInput(CalperiodError, TypeError, ValueError):
    """A value cannot be interpreted as a datepoint or a duration."""


__all__ = [
    "CalperiodError",
    "InvalidRange",
    "OutOfRange",
    "DisjointIntervals",
    "OverlappingIntervals",
    "OutOfBounds",
    "InvalidInput",
]

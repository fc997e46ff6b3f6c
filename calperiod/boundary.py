from datetime import datetime
from enum import Enum

from calperiod.errors import InvalidInput


class BoundaryType(str, Enum):
    """Which endpoints of an interval are members of the interval.

    Values use interval notation, so ``BoundaryType("[]")`` works and
    ``str`` comparisons against the notation hold.
    """

    INCLUDE_START_EXCLUDE_END = "[)"
    INCLUDE_ALL = "[]"
    EXCLUDE_ALL = "()"
    EXCLUDE_START_INCLUDE_END = "(]"

    @property
    def start_included(self) -> bool:
        return self.value[0] == "["

    @property
    def end_included(self) -> bool:
        return self.value[1] == "]"

    @classmethod
    def from_flags(cls, start_included: bool, end_included: bool) -> "BoundaryType":
        return cls(("[" if start_included else "(") + ("]" if end_included else ")"))

    @classmethod
    def coerce(cls, value: "BoundaryType | str") -> "BoundaryType":
        """Accept a BoundaryType or its notation string."""
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(repr(member.value) for member in cls)
            raise InvalidInput(
                f"Invalid boundary type {value!r}.\n" f"Valid boundary types: {valid}"
            ) from None

    def __str__(self) -> str:
        return self.value


def within_start(point: datetime, start: datetime, included: bool) -> bool:
    """True if ``point`` is on the inner side of a start endpoint."""
    return point > start or (included and point == start)


def within_end(point: datetime, end: datetime, included: bool) -> bool:
    """True if ``point`` is on the inner side of an end endpoint."""
    return point < end or (included and point == end)

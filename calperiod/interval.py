from collections.abc import Iterator
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from functools import reduce
from typing import TYPE_CHECKING, Any

from dateutil.relativedelta import relativedelta
from typing_extensions import override

from calperiod.boundary import BoundaryType, within_end, within_start
from calperiod.datepoint import (
    Datepoint,
    DurationLike,
    datepoint,
    duration as to_duration,
    is_positive,
)
from calperiod.errors import (
    DisjointIntervals,
    InvalidInput,
    InvalidRange,
    OverlappingIntervals,
)
from calperiod.util import ISO_FORMAT

if TYPE_CHECKING:
    from calperiod.sequence import IntervalSequence


def _iso(instant: datetime) -> str:
    return instant.astimezone(timezone.utc).strftime(ISO_FORMAT)


@dataclass(frozen=True)
class Interval:
    """An immutable span of time between two ordered instants.

    ``start`` and ``end`` accept any datepoint-like value and are stored as
    timezone-aware datetimes. ``boundary_type`` decides whether each
    endpoint belongs to the interval; the default ``[)`` includes the start
    and excludes the end.

    Two intervals are equal when their instants (regardless of timezone)
    and boundary types are equal.
    """

    start: datetime
    end: datetime
    boundary_type: BoundaryType = BoundaryType.INCLUDE_START_EXCLUDE_END

    def __post_init__(self) -> None:
        start = datepoint(self.start)
        end = datepoint(self.end)
        if start > end:
            raise InvalidRange(
                f"Interval start ({start.isoformat()}) must be <= end ({end.isoformat()})"
            )
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)
        object.__setattr__(self, "boundary_type", BoundaryType.coerce(self.boundary_type))

    @classmethod
    def from_duration(
        cls,
        start: Datepoint,
        length: DurationLike,
        boundary_type: BoundaryType | str = BoundaryType.INCLUDE_START_EXCLUDE_END,
    ) -> "Interval":
        """Create an interval starting at ``start`` and lasting ``length``."""
        start = datepoint(start)
        return cls(start, start + to_duration(length), boundary_type)

    @classmethod
    def from_duration_before_end(
        cls,
        end: Datepoint,
        length: DurationLike,
        boundary_type: BoundaryType | str = BoundaryType.INCLUDE_START_EXCLUDE_END,
    ) -> "Interval":
        """Create an interval ending at ``end`` and lasting ``length``."""
        end = datepoint(end)
        return cls(end - to_duration(length), end, boundary_type)

    @classmethod
    def around(
        cls,
        point: Datepoint,
        length: DurationLike,
        boundary_type: BoundaryType | str = BoundaryType.INCLUDE_START_EXCLUDE_END,
    ) -> "Interval":
        """Create an interval reaching ``length`` before and after ``point``."""
        point = datepoint(point)
        delta = to_duration(length)
        return cls(point - delta, point + delta, boundary_type)

    # --- Accessors ---

    @property
    def is_degenerate(self) -> bool:
        """True if the interval has zero length."""
        return self.start == self.end

    @property
    def timedelta(self) -> timedelta:
        """Exact elapsed time between the endpoints, across any offset change."""
        return self.end.astimezone(timezone.utc) - self.start.astimezone(timezone.utc)

    def duration(self) -> relativedelta:
        """Calendar-aware length of the interval, never negative."""
        return relativedelta(self.end.astimezone(self.start.tzinfo), self.start)

    def duration_in_seconds(self) -> float:
        return self.timedelta.total_seconds()

    # --- Relations ---

    def contains_instant(self, point: Datepoint) -> bool:
        point = datepoint(point)
        return within_start(
            point, self.start, self.boundary_type.start_included
        ) and within_end(point, self.end, self.boundary_type.end_included)

    def contains_interval(self, other: "Interval") -> bool:
        """True if every instant of ``other`` is an instant of this interval.

        An endpoint shared by both intervals is only covered when this
        interval includes it or ``other`` excludes it.
        """
        own, theirs = self.boundary_type, other.boundary_type
        starts_inside = other.start > self.start or (
            other.start == self.start
            and (own.start_included or not theirs.start_included)
        )
        ends_inside = other.end < self.end or (
            other.end == self.end and (own.end_included or not theirs.end_included)
        )
        return starts_inside and ends_inside

    def contains(self, item: "Interval | Datepoint") -> bool:
        if isinstance(item, Interval):
            return self.contains_interval(item)
        return self.contains_instant(item)

    def __contains__(self, item: "Interval | Datepoint") -> bool:
        return self.contains(item)

    def is_before(self, item: "Interval | Datepoint") -> bool:
        """True if this interval lies entirely before ``item``."""
        if isinstance(item, Interval):
            touching_member = (
                self.boundary_type.end_included and item.boundary_type.start_included
            )
            return self.end < item.start or (
                self.end == item.start and not touching_member
            )
        point = datepoint(item)
        return self.end < point or (
            self.end == point and not self.boundary_type.end_included
        )

    def is_after(self, item: "Interval | Datepoint") -> bool:
        """True if this interval lies entirely after ``item``."""
        if isinstance(item, Interval):
            return item.is_before(self)
        point = datepoint(item)
        return self.start > point or (
            self.start == point and not self.boundary_type.start_included
        )

    def abuts(self, other: "Interval") -> bool:
        """True if the intervals touch at exactly one endpoint."""
        return self.end == other.start or self.start == other.end

    def overlaps(self, other: "Interval") -> bool:
        """True if the intervals share at least one instant.

        Abutting intervals only overlap when the shared endpoint is a member
        of both.
        """
        if self.abuts(other):
            shared = self.end if self.end == other.start else self.start
            return self.contains_instant(shared) and other.contains_instant(shared)
        return self.start < other.end and self.end > other.start

    def same_value_as(self, other: "Interval") -> bool:
        return self == other

    # --- Duration comparison ---

    def compare_duration(self, other: "Interval") -> int:
        """Return -1, 0 or 1 as this duration is shorter, equal or longer."""
        target = self.start + other.duration()
        return (self.end > target) - (self.end < target)

    def duration_greater_than(self, other: "Interval") -> bool:
        return self.compare_duration(other) == 1

    def duration_less_than(self, other: "Interval") -> bool:
        return self.compare_duration(other) == -1

    def same_duration_as(self, other: "Interval") -> bool:
        return self.compare_duration(other) == 0

    def duration_diff(self, other: "Interval") -> relativedelta:
        """How much longer this interval is than ``other`` (negative if shorter)."""
        return relativedelta(
            self.end.astimezone(self.start.tzinfo), self.start + other.duration()
        )

    def duration_in_seconds_diff(self, other: "Interval") -> float:
        return self.duration_in_seconds() - other.duration_in_seconds()

    # --- Combinators ---

    def merge(self, *others: "Interval") -> "Interval":
        """Return the smallest interval covering this one and all ``others``.

        Never fails, whether or not the operands overlap.
        """

        def reducer(carry: "Interval", other: "Interval") -> "Interval":
            start, start_included = carry.start, carry.boundary_type.start_included
            if other.start < start:
                start, start_included = other.start, other.boundary_type.start_included
            elif other.start == start:
                start_included = start_included or other.boundary_type.start_included

            end, end_included = carry.end, carry.boundary_type.end_included
            if other.end > end:
                end, end_included = other.end, other.boundary_type.end_included
            elif other.end == end:
                end_included = end_included or other.boundary_type.end_included

            return Interval(
                start, end, BoundaryType.from_flags(start_included, end_included)
            )

        return reduce(reducer, others, self)

    def intersect(self, other: "Interval") -> "Interval":
        """Return the instants shared by both intervals.

        Raises:
            DisjointIntervals: If the intervals do not overlap
        """
        if not self.overlaps(other):
            raise DisjointIntervals(
                f"Cannot intersect intervals that do not overlap.\n"
                f"Got: {self} and {other}\n"
                f"Hint: Check a.overlaps(b) before calling a.intersect(b)"
            )

        start, start_included = self.start, self.boundary_type.start_included
        if other.start > start:
            start, start_included = other.start, other.boundary_type.start_included
        elif other.start == start:
            start_included = start_included and other.boundary_type.start_included

        end, end_included = self.end, self.boundary_type.end_included
        if other.end < end:
            end, end_included = other.end, other.boundary_type.end_included
        elif other.end == end:
            end_included = end_included and other.boundary_type.end_included

        return Interval(start, end, BoundaryType.from_flags(start_included, end_included))

    def gap(self, other: "Interval") -> "Interval":
        """Return the interval separating two non-overlapping intervals.

        The gap includes an endpoint only when the neighbouring interval
        excludes it. Abutting intervals have a zero-length gap.

        Raises:
            OverlappingIntervals: If the intervals overlap
        """
        if self.overlaps(other):
            raise OverlappingIntervals(
                f"Cannot compute the gap between overlapping intervals.\n"
                f"Got: {self} and {other}\n"
                f"Hint: Use a.intersect(b) for the shared part, "
                f"or check a.overlaps(b) first"
            )

        if other.start >= self.end:
            earlier, later = self, other
        else:
            earlier, later = other, self
        return Interval(
            earlier.end,
            later.start,
            BoundaryType.from_flags(
                not earlier.boundary_type.end_included,
                not later.boundary_type.start_included,
            ),
        )

    def diff(self, other: "Interval") -> "IntervalSequence":
        """Return the parts of both intervals lying outside their intersection.

        The result holds zero, one or two intervals, earliest first.
        Zero-length pieces are dropped.

        Raises:
            DisjointIntervals: If the intervals do not overlap
        """
        # Import at runtime to avoid circular dependency
        from calperiod.sequence import IntervalSequence

        if not self.overlaps(other):
            raise DisjointIntervals(
                f"Cannot diff intervals that do not overlap.\n"
                f"Got: {self} and {other}\n"
                f"Hint: Check a.overlaps(b) before calling a.diff(b)"
            )

        pieces = IntervalSequence()
        if self.start != other.start:
            early, late = (self, other) if self.start < other.start else (other, self)
            pieces.push(
                Interval(
                    early.start,
                    late.start,
                    BoundaryType.from_flags(
                        early.boundary_type.start_included,
                        not late.boundary_type.start_included,
                    ),
                )
            )
        if self.end != other.end:
            early, late = (self, other) if self.end < other.end else (other, self)
            pieces.push(
                Interval(
                    early.end,
                    late.end,
                    BoundaryType.from_flags(
                        not early.boundary_type.end_included,
                        late.boundary_type.end_included,
                    ),
                )
            )
        if len(pieces) == 2:
            first, second = pieces
            # An intersection without members leaves its instant to the earlier piece
            if (
                first.end == second.start
                and first.boundary_type.end_included
                and second.boundary_type.start_included
            ):
                pieces.set(
                    1,
                    second.with_boundary_type(
                        BoundaryType.from_flags(False, second.boundary_type.end_included)
                    ),
                )
        return pieces

    # --- Derived intervals ---

    def starting_on(self, start: Datepoint) -> "Interval":
        return replace(self, start=start)

    def ending_on(self, end: Datepoint) -> "Interval":
        return replace(self, end=end)

    def with_duration(self, length: DurationLike) -> "Interval":
        return replace(self, end=self.start + to_duration(length))

    def with_duration_before_end(self, length: DurationLike) -> "Interval":
        return replace(self, start=self.end - to_duration(length))

    def move_start_date(self, delta: DurationLike) -> "Interval":
        return replace(self, start=self.start + to_duration(delta))

    def move_end_date(self, delta: DurationLike) -> "Interval":
        return replace(self, end=self.end + to_duration(delta))

    def move(self, delta: DurationLike) -> "Interval":
        """Shift both endpoints by the same signed duration."""
        delta = to_duration(delta)
        return replace(self, start=self.start + delta, end=self.end + delta)

    def with_boundary_type(self, boundary_type: BoundaryType | str) -> "Interval":
        return replace(self, boundary_type=boundary_type)

    # --- Iteration helpers ---

    def _positive_step(self, step: DurationLike) -> relativedelta:
        delta = to_duration(step)
        if not is_positive(delta, self.start):
            raise InvalidInput(
                f"Step must be a positive duration, got {delta!r}.\n"
                f"Example: interval.split('1 DAY')"
            )
        return delta

    def split(self, length: DurationLike) -> Iterator["Interval"]:
        """Yield contiguous intervals of ``length`` covering this interval.

        The first piece shares this interval's start, the last its end; the
        last piece may be shorter than ``length``.
        """
        step = self._positive_step(length)
        start = self.start
        while True:
            end = min(start + step, self.end)
            yield replace(self, start=start, end=end)
            start = end
            if start >= self.end:
                return

    def split_backwards(self, length: DurationLike) -> Iterator["Interval"]:
        """Like split(), but cut from the end; pieces are yielded latest first."""
        step = self._positive_step(length)
        end = self.end
        while True:
            start = max(end - step, self.start)
            yield replace(self, start=start, end=end)
            end = start
            if end <= self.start:
                return

    def datepoints(
        self, step: DurationLike, exclude_start: bool = False
    ) -> Iterator[datetime]:
        """Yield instants from ``start`` every ``step`` while before ``end``."""
        delta = self._positive_step(step)
        index = 1 if exclude_start else 0
        while (point := self.start + delta * index) < self.end:
            yield point
            index += 1

    # --- Serialization ---

    @override
    def __str__(self) -> str:
        """Interval notation around UTC ISO 8601 endpoints."""
        notation = self.boundary_type.value
        return f"{notation[0]}{_iso(self.start)}, {_iso(self.end)}{notation[1]}"

    def to_iso(self) -> str:
        return f"{_iso(self.start)}/{_iso(self.end)}"

    def to_json(self) -> dict[str, Any]:
        return {
            "start": _iso(self.start),
            "end": _iso(self.end),
            "boundary_type": self.boundary_type.value,
        }


__all__ = ["Interval"]

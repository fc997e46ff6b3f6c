"""Ordered, mutable collections of intervals.

IntervalSequence keeps Interval values in insertion order and layers the
multi-interval algorithms (bounding span, gaps, pairwise intersections,
unions) on top of the Interval algebra.
"""

import logging
from collections.abc import Callable, Iterable, Iterator
from functools import cmp_to_key
from typing import Any, overload

from calperiod.boundary import BoundaryType
from calperiod.errors import InvalidInput, OutOfBounds
from calperiod.interval import Interval

log = logging.getLogger(__name__)

Comparator = Callable[[Interval, Interval], int]
Predicate = Callable[[Interval], bool]


def by_start(first: Interval, second: Interval) -> int:
    """Order intervals by start, then by end."""
    left, right = (first.start, first.end), (second.start, second.end)
    return (left > right) - (left < right)


def _sort_key(interval: Interval) -> tuple[Any, ...]:
    return (interval.start, interval.end)


def _touches(interval: Interval, span: Interval) -> bool:
    return interval.overlaps(span) or interval.abuts(span)


def _is_empty(interval: Interval) -> bool:
    return (
        interval.is_degenerate
        and interval.boundary_type is not BoundaryType.INCLUDE_ALL
    )


class IntervalSequence:
    """A list-like container of Interval values.

    Duplicates are allowed and insertion order is kept until the sequence is
    explicitly sorted. Failed calls never modify the sequence.

    Not thread-safe: guard the whole sequence with a single lock if several
    threads share it.

    Example:
        >>> from calperiod import IntervalSequence, day
        >>> seq = IntervalSequence(day("2012-06-23"), day("2012-06-25"))
        >>> [str(gap) for gap in seq.gaps()]
        ['[2012-06-24T00:00:00.000000Z, 2012-06-25T00:00:00.000000Z)']
    """

    def __init__(self, *intervals: Interval) -> None:
        self._intervals: list[Interval] = []
        self.push(*intervals)

    # --- Container protocol ---

    def __len__(self) -> int:
        return len(self._intervals)

    def __iter__(self) -> Iterator[Interval]:
        return iter(self._intervals)

    def __contains__(self, item: object) -> bool:
        return isinstance(item, Interval) and self.contains(item)

    @overload
    def __getitem__(self, index: int) -> Interval: ...

    @overload
    def __getitem__(self, index: slice) -> "IntervalSequence": ...

    def __getitem__(self, index: int | slice) -> "Interval | IntervalSequence":
        if isinstance(index, slice):
            return IntervalSequence(*self._intervals[index])
        return self.get(index)

    def __setitem__(self, index: int, interval: Interval) -> None:
        self.set(index, interval)

    def __delitem__(self, index: int) -> None:
        self.remove(index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntervalSequence):
            return NotImplemented
        return self._intervals == other._intervals

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"IntervalSequence({', '.join(str(i) for i in self._intervals)})"

    def is_empty(self) -> bool:
        return not self._intervals

    def to_list(self) -> list[Interval]:
        """Return a snapshot of the stored intervals."""
        return list(self._intervals)

    # --- Index access ---

    def _check_index(self, index: int) -> None:
        if (
            isinstance(index, bool)
            or not isinstance(index, int)
            or not 0 <= index < len(self._intervals)
        ):
            raise OutOfBounds(
                f"Index {index!r} is out of bounds for a sequence of "
                f"{len(self._intervals)} interval(s).\n"
                f"Valid indexes: 0 to {len(self._intervals) - 1}"
            )

    def get(self, index: int) -> Interval:
        self._check_index(index)
        return self._intervals[index]

    def set(self, index: int, interval: Interval) -> None:
        """Replace the interval stored at ``index``."""
        self._check_index(index)
        _require_intervals((interval,))
        self._intervals[index] = interval

    def remove(self, index: int) -> Interval:
        """Remove and return the interval at ``index``; later ones shift down."""
        self._check_index(index)
        return self._intervals.pop(index)

    def push(self, *intervals: Interval) -> None:
        """Append intervals at the end, in argument order."""
        _require_intervals(intervals)
        self._intervals.extend(intervals)

    def clear(self) -> None:
        self._intervals.clear()

    # --- Search ---

    def contains(self, interval: Interval) -> bool:
        return self.find(interval) is not None

    def find(self, interval: Interval) -> int | None:
        """Return the lowest index holding an interval equal to ``interval``."""
        for index, stored in enumerate(self._intervals):
            if stored.same_value_as(interval):
                return index
        return None

    def some(self, predicate: Predicate) -> bool:
        return any(predicate(interval) for interval in self._intervals)

    def every(self, predicate: Predicate) -> bool:
        return all(predicate(interval) for interval in self._intervals)

    # --- Derived sequences ---

    def filter(self, predicate: Predicate) -> "IntervalSequence":
        """Return a new sequence with the intervals satisfying ``predicate``."""
        return IntervalSequence(*(i for i in self._intervals if predicate(i)))

    def sort(self, comparator: Comparator | None = None) -> None:
        """Stable in-place sort with a ``(a, b) -> -1 | 0 | 1`` comparator.

        Defaults to ordering by start, then end.
        """
        # Sort a copy so a failing comparator leaves the sequence untouched
        self._intervals = sorted(
            self._intervals, key=cmp_to_key(comparator or by_start)
        )

    def sorted(self, comparator: Comparator | None = None) -> "IntervalSequence":
        return IntervalSequence(
            *sorted(self._intervals, key=cmp_to_key(comparator or by_start))
        )

    # --- Multi-interval algorithms ---

    def get_interval(self) -> Interval | None:
        """Return the smallest interval covering every member, or None if empty."""
        if not self._intervals:
            return None
        first, *rest = self._intervals
        return first.merge(*rest)

    def gaps(self) -> "IntervalSequence":
        """Return the uncovered stretches between members, left to right.

        Algorithm: Coalesce members with unions(), then take the gap between
        each pair of consecutive spans. Spans never touch, so every gap has
        a positive length and overlaps no member.

        A member-less degenerate span holds an instant no member covers. That
        instant goes to the gap after it, unless the span comes first, where
        it lies outside get_interval() too.
        """
        spans = self.unions()._intervals
        result = IntervalSequence()
        for index, (earlier, later) in enumerate(zip(spans, spans[1:])):
            if _is_empty(earlier):
                start_included = index > 0
            else:
                start_included = not earlier.boundary_type.end_included
            end_included = not _is_empty(later) and not later.boundary_type.start_included
            result._intervals.append(
                Interval(
                    earlier.end,
                    later.start,
                    BoundaryType.from_flags(start_included, end_included),
                )
            )

        log.debug(
            "found %d gap(s) among %d interval(s)", len(result), len(self._intervals)
        )
        return result

    def intersections(self) -> "IntervalSequence":
        """Return the intersection of every overlapping pair of members.

        Pairs are visited by ascending first index, then ascending second
        index.
        """
        result = IntervalSequence()
        for index, interval in enumerate(self._intervals):
            for other in self._intervals[index + 1 :]:
                if interval.overlaps(other):
                    result._intervals.append(interval.intersect(other))

        log.debug(
            "found %d intersection(s) among %d interval(s)",
            len(result),
            len(self._intervals),
        )
        return result

    def unions(self) -> "IntervalSequence":
        """Coalesce members into sorted, disjoint, non-abutting spans.

        Every member is contained in exactly one of the returned spans.
        """
        result = IntervalSequence()
        ordered = sorted(self._intervals, key=_sort_key)
        if not ordered:
            return result

        span = ordered[0]
        for interval in ordered[1:]:
            if _touches(interval, span):
                span = span.merge(interval)
            else:
                result._intervals.append(span)
                span = interval
        result._intervals.append(span)

        log.debug("merged %d interval(s) into %d span(s)", len(ordered), len(result))
        return result


def _require_intervals(items: Iterable[Any]) -> None:
    for item in items:
        if not isinstance(item, Interval):
            raise InvalidInput(
                f"IntervalSequence only stores Interval values.\n"
                f"Got {type(item).__name__!r}: {item!r}"
            )


__all__ = ["IntervalSequence", "by_start"]

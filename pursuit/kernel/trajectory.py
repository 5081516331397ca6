"""Trajectory — an ordered, sparse timeseries of (date, value) observations.

Dates are epoch milliseconds. Points are kept strictly increasing by date;
inserting at an existing date replaces the stored value.
"""

from __future__ import annotations

import math
from bisect import bisect_left, bisect_right
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from pursuit.kernel.features import HOUR_MS, divide


@dataclass(frozen=True, slots=True)
class Point:
    date: int
    value: float


def _date_of(point: Point) -> int:
    return point.date


class Trajectory:
    """Owned, mutable container of Points sorted ascending by date."""

    __slots__ = ("_line",)

    def __init__(self, points: Iterable[Point] | None = None) -> None:
        self._line: list[Point] = []
        for p in points or ():
            self.insert(p.date, p.value)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[int, float]]) -> Trajectory:
        t = cls()
        for date, value in pairs:
            t.insert(date, value)
        return t

    # -- mutation -----------------------------------------------------------

    def insert(self, date: int, value: float) -> Trajectory:
        """Insert a point, replacing any point already stored at `date`."""
        p = bisect_left(self._line, date, key=_date_of)
        point = Point(date, value)
        if p < len(self._line) and self._line[p].date == date:
            self._line[p] = point
        else:
            self._line.insert(p, point)
        return self

    def remove(self, date: int) -> None:
        p = bisect_left(self._line, date, key=_date_of)
        if p < len(self._line) and self._line[p].date == date:
            del self._line[p]

    def compact_head(self, duration: int = HOUR_MS) -> None:
        """Drop intermediate points within `duration` before the latest one.

        The earliest and the latest point always survive. Calling this after
        each insertion collapses a burst of edits into one trailing
        observation.
        """
        if len(self._line) < 3:
            return
        head = self._line[-1]
        i = len(self._line) - 2
        while i > 0 and head.date - self._line[i].date <= duration:
            i -= 1
        del self._line[i + 1:-1]

    # -- queries ------------------------------------------------------------

    def at(self, date: float) -> float:
        """Value at `date`: flat outside the recorded range, linear inside.

        Returns NaN when the trajectory is empty.
        """
        if not self._line:
            return math.nan

        earliest, latest = self._line[0], self._line[-1]
        if date <= earliest.date:
            return earliest.value
        if date >= latest.date:
            return latest.value

        i0 = bisect_right(self._line, date, key=_date_of) - 1
        t0, m0 = self._line[i0].date, self._line[i0].value
        t2, m2 = self._line[i0 + 1].date, self._line[i0 + 1].value
        return m0 + (date - t0) * (m2 - m0) / (t2 - t0)

    def velocity(self, a: float, b: float) -> float:
        """Mean rate of change between `a` and `b`, in value units per ms."""
        return divide(self.at(b) - self.at(a), b - a)

    @property
    def earliest(self) -> Point | None:
        return self._line[0] if self._line else None

    @property
    def latest(self) -> Point | None:
        return self._line[-1] if self._line else None

    def __len__(self) -> int:
        return len(self._line)

    def __iter__(self) -> Iterator[Point]:
        return iter(tuple(self._line))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Trajectory):
            return NotImplemented
        return self._line == other._line

    def __repr__(self) -> str:
        return f"Trajectory({self._line!r})"

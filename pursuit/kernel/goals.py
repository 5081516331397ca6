"""Goal kinds backed by a Trajectory — derived metrics only, never raises.

Every metric takes the evaluation time `by_date` (epoch ms) explicitly;
nothing here reads the wall clock. Degenerate states (no data, zero-length
windows) come back as NaN rather than exceptions.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from pursuit.kernel.features import DAY_MS, clamp, divide
from pursuit.kernel.trajectory import Trajectory


class Stage(str, Enum):
    draft = "draft"
    pledged = "pledged"
    archived = "archived"


@dataclass(slots=True, eq=True)
class Goal:
    """Reach `target` within the fixed window [start, end].

    `target` below the baseline expresses a descending goal.
    """

    id: str = ""
    name: str = ""
    unit: str = ""
    start: int = 0
    end: int = 0
    target: float = 1.0
    stage: Stage = Stage.pledged
    trajectory: Trajectory = field(default_factory=Trajectory)

    @property
    def baseline(self) -> float:
        return self.trajectory.at(self.start)

    @property
    def progress(self) -> float:
        """Fraction of the way from baseline to target, by the latest value."""
        latest = self.trajectory.latest
        if latest is None:
            return math.nan
        return divide(latest.value - self.baseline, self.target - self.baseline)

    def time_spent(self, by_date: float) -> float:
        total = self.end - self.start
        if total == 0:
            return 1.0
        return (by_date - self.start) / total

    def days_until_start(self, by_date: float) -> float:
        return (self.start - by_date) / DAY_MS

    def days_until_end(self, by_date: float) -> float:
        return (self.end - by_date) / DAY_MS

    def relative_progress(self, by_date: float) -> float:
        """Progress at `by_date` normalized by the fraction of time spent."""
        if by_date <= self.start:
            return 1.0
        baseline = self.baseline
        p = divide(self.trajectory.at(by_date) - baseline, self.target - baseline)
        t = self.time_spent(min(self.end, by_date))
        return divide(p, t)

    def is_on_track(self, by_date: float) -> bool:
        # compares the current progress, not the progress at by_date
        return self.progress >= self.time_spent(min(self.end, by_date))

    def velocity(self, by_date: float) -> float:
        return self.trajectory.velocity(self.start, by_date)

    def velocity_30d(self, by_date: float, window_days: int = 30) -> float:
        return self.trajectory.velocity(max(self.start, by_date - window_days * DAY_MS), by_date)

    def velocity_required(self, by_date: float) -> float:
        """Constant rate needed from `by_date` to hit target at `end`.

        ±inf or NaN when `by_date == end`.
        """
        return divide(self.target - self.trajectory.at(by_date), self.end - by_date)


@dataclass(slots=True, eq=True)
class RegularGoal:
    """Keep the delta over a rolling window of `window` days above a floor.

    `total` is the ideal delta over one window. `target` is the absolute
    floor for that delta (same unit as `total`, not a fraction of it); the
    span between the two is the budget.
    """

    id: str = ""
    name: str = ""
    description: str = ""
    unit: str = ""
    window: int = 28
    target: float = 0.0
    total: float = 0.0
    trajectory: Trajectory = field(default_factory=Trajectory)

    @property
    def window_ms(self) -> int:
        return self.window * DAY_MS

    def value(self, by_date: float) -> float:
        return self.trajectory.at(by_date) - self.trajectory.at(by_date - self.window_ms)

    def budget_remaining(self, by_date: float) -> float:
        return divide(self.value(by_date) - self.target, self.total - self.target)

    def partial_data(self, by_date: float) -> bool:
        """True while the window ending at `by_date` predates the first point."""
        earliest = self.trajectory.earliest
        if earliest is None:
            return False
        return earliest.date > by_date - self.window_ms

    def budget_remaining_prorated(self, by_date: float) -> float:
        """Budget remaining, with total and floor scaled to the covered window.

        The covered fraction is at least one day's worth, and the prorated
        result is clamped into [0, 1]; NaN passes through unclamped.
        """
        earliest = self.trajectory.earliest
        if earliest is None:
            return math.nan
        if not self.partial_data(by_date):
            return self.budget_remaining(by_date)
        r = max(DAY_MS, by_date - earliest.date) / self.window_ms
        total = self.total * r
        floor = self.target * r
        b = divide(self.value(by_date) - floor, total - floor)
        if math.isnan(b):
            return b
        return clamp(b)


@dataclass(slots=True, eq=True)
class BudgetGoal:
    """A spend-down budget: `current` consumed out of `target`."""

    id: str = ""
    name: str = ""
    description: str = ""
    target: float = 0.0
    current: float = 0.0
    last_updated: int = 0

    @property
    def remaining(self) -> float:
        return self.target - self.current

    @property
    def used(self) -> float:
        return divide(self.current, self.target)

    def set_value(self, value: float, by_date: int) -> None:
        self.current = value
        self.last_updated = by_date

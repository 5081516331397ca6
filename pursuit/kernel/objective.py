"""Objective aggregate — groups goals by id, routes edits and value updates to them.

Performs no metric computation. Unknown ids raise GoalNotFoundError.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from pursuit.exceptions import GoalNotFoundError
from pursuit.kernel.features import DAY_MS, HOUR_MS
from pursuit.kernel.goals import BudgetGoal, Goal, RegularGoal, Stage
from pursuit.kernel.trajectory import Trajectory

logger = logging.getLogger(__name__)


def _record(trajectory: Trajectory, value: float, by_date: int, compaction_window: int) -> None:
    trajectory.insert(by_date, value)
    trajectory.compact_head(compaction_window)


def _incremented(trajectory: Trajectory, delta: float) -> float:
    latest = trajectory.latest
    return delta if latest is None else latest.value + delta


@dataclass(slots=True)
class Objective:
    id: str
    name: str = ""
    description: str = ""
    goals: dict[str, Goal] = field(default_factory=dict)
    regular_goals: dict[str, RegularGoal] = field(default_factory=dict)
    budget_goals: dict[str, BudgetGoal] = field(default_factory=dict)

    def goal(self, goal_id: str) -> Goal:
        try:
            return self.goals[goal_id]
        except KeyError:
            raise GoalNotFoundError(goal_id, "goal") from None

    def regular_goal(self, goal_id: str) -> RegularGoal:
        try:
            return self.regular_goals[goal_id]
        except KeyError:
            raise GoalNotFoundError(goal_id, "regular_goal") from None

    def budget_goal(self, goal_id: str) -> BudgetGoal:
        try:
            return self.budget_goals[goal_id]
        except KeyError:
            raise GoalNotFoundError(goal_id, "budget_goal") from None

    # -- value updates --------------------------------------------------------

    def set_goal_value(
        self, goal_id: str, value: float, by_date: int, compaction_window: int = HOUR_MS
    ) -> None:
        _record(self.goal(goal_id).trajectory, value, by_date, compaction_window)
        logger.debug("objective %s: goal %s set to %s at %d", self.id, goal_id, value, by_date)

    def increment_goal_value(
        self, goal_id: str, delta: float, by_date: int, compaction_window: int = HOUR_MS
    ) -> None:
        t = self.goal(goal_id).trajectory
        self.set_goal_value(goal_id, _incremented(t, delta), by_date, compaction_window)

    def set_regular_goal_value(
        self, goal_id: str, value: float, by_date: int, compaction_window: int = HOUR_MS
    ) -> None:
        _record(self.regular_goal(goal_id).trajectory, value, by_date, compaction_window)
        logger.debug(
            "objective %s: regular goal %s set to %s at %d", self.id, goal_id, value, by_date
        )

    def increment_regular_goal_value(
        self, goal_id: str, delta: float, by_date: int, compaction_window: int = HOUR_MS
    ) -> None:
        t = self.regular_goal(goal_id).trajectory
        self.set_regular_goal_value(goal_id, _incremented(t, delta), by_date, compaction_window)

    def set_budget_goal_value(self, goal_id: str, value: float, by_date: int) -> None:
        self.budget_goal(goal_id).set_value(value, by_date)
        logger.debug("objective %s: budget goal %s set to %s", self.id, goal_id, value)

    # -- editing ---------------------------------------------------------------

    def add_goal(
        self,
        goal_id: str,
        by_date: int,
        name: str = "New goal",
        unit: str = "",
        target: float = 100.0,
        duration_days: int = 7,
    ) -> Goal:
        """Add a goal running from `by_date` for `duration_days`, starting at zero."""
        goal = Goal(
            id=goal_id,
            name=name,
            unit=unit,
            start=by_date,
            end=by_date + duration_days * DAY_MS,
            target=target,
            stage=Stage.pledged,
            trajectory=Trajectory().insert(by_date, 0.0),
        )
        self.goals[goal_id] = goal
        logger.info("objective %s: added goal %s", self.id, goal_id)
        return goal

    def add_regular_goal(
        self,
        goal_id: str,
        by_date: int,
        name: str = "New regular goal",
        description: str = "",
        unit: str = "",
        window: int = 28,
        total: float = 100.0,
        target: float = 90.0,
    ) -> RegularGoal:
        goal = RegularGoal(
            id=goal_id,
            name=name,
            description=description,
            unit=unit,
            window=window,
            target=target,
            total=total,
            trajectory=Trajectory().insert(by_date, 0.0),
        )
        self.regular_goals[goal_id] = goal
        logger.info("objective %s: added regular goal %s", self.id, goal_id)
        return goal

    def delete_goal(self, goal_id: str) -> None:
        self.goal(goal_id)
        del self.goals[goal_id]
        logger.info("objective %s: deleted goal %s", self.id, goal_id)

    def delete_regular_goal(self, goal_id: str) -> None:
        self.regular_goal(goal_id)
        del self.regular_goals[goal_id]
        logger.info("objective %s: deleted regular goal %s", self.id, goal_id)

    def update_goal(
        self,
        goal_id: str,
        name: str | None = None,
        unit: str | None = None,
        start: int | None = None,
        end: int | None = None,
        target: float | None = None,
        stage: Stage | None = None,
    ) -> Goal:
        """Edit goal fields; `None` leaves a field unchanged.

        Moving `start` discards the trajectory and keeps only the old
        baseline, now recorded at the new start.
        """
        goal = self.goal(goal_id)
        if name is not None:
            goal.name = name
        if unit is not None:
            goal.unit = unit
        if end is not None:
            goal.end = end
        if target is not None:
            goal.target = target
        if stage is not None:
            goal.stage = stage
        if start is not None and start != goal.start:
            baseline = goal.baseline
            goal.start = start
            goal.trajectory = Trajectory()
            if not math.isnan(baseline):
                goal.trajectory.insert(start, baseline)
        return goal

    def reset_baseline(self, goal_id: str, baseline: float) -> Goal:
        """Replace the goal's trajectory with the single point (start, baseline)."""
        goal = self.goal(goal_id)
        goal.trajectory = Trajectory().insert(goal.start, baseline)
        logger.info("objective %s: reset baseline of goal %s to %s", self.id, goal_id, baseline)
        return goal

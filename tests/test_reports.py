"""Tests for the velocity / progress / budget report strings."""

import math

from pursuit.kernel.features import DAY_MS
from pursuit.kernel.goals import Goal, RegularGoal
from pursuit.kernel.reports import (
    budget_status,
    budget_summary,
    progress_fill_color,
    progress_status,
    velocity_report,
)
from pursuit.kernel.trajectory import Trajectory


class TestVelocityReport:
    def test_per_day(self):
        goal = Goal(
            start=0,
            end=60 * DAY_MS,
            target=180,
            unit="sessions",
            trajectory=Trajectory().insert(0, 0).insert(30 * DAY_MS, 135),
        )
        assert (
            velocity_report(goal, 30 * DAY_MS)
            == "30d: 4.5 sessions per day; now need 1.5 sessions per day"
        )

    def test_per_week(self):
        goal = Goal(
            start=0,
            end=60 * DAY_MS,
            target=30,
            unit="sessions",
            trajectory=Trajectory().insert(0, 0).insert(35 * DAY_MS, 20),
        )
        assert (
            velocity_report(goal, 35 * DAY_MS)
            == "30d: 4.0 sessions per week; now need 2.8 sessions per week"
        )

    def test_per_month(self):
        goal = Goal(
            start=0,
            end=180 * DAY_MS,
            target=12,
            unit="sessions",
            trajectory=Trajectory().insert(0, 0).insert(90 * DAY_MS, 9),
        )
        assert (
            velocity_report(goal, 90 * DAY_MS)
            == "30d: 3.0 sessions per month; now need 1.0 sessions per month"
        )

    def test_descending_goal_uses_magnitude(self):
        goal = Goal(
            start=0,
            end=60 * DAY_MS,
            target=-180,
            unit="kg",
            trajectory=Trajectory().insert(0, 0).insert(30 * DAY_MS, -135),
        )
        assert velocity_report(goal, 30 * DAY_MS) == "30d: -4.5 kg per day; now need -1.5 kg per day"

    def test_no_data(self):
        goal = Goal(start=0, end=60 * DAY_MS, target=10, unit="kg")
        assert math.isnan(goal.velocity_30d(30 * DAY_MS))
        assert velocity_report(goal, 30 * DAY_MS) == "no data"


class TestProgressFillColor:
    @staticmethod
    def _goal(*points):
        t = Trajectory()
        for d, v in points:
            t.insert(d, v)
        return Goal(start=0, end=10, target=100, trajectory=t)

    def test_green_at_100_percent(self):
        assert progress_fill_color(self._goal((0, 0), (3, 30)), 3) == "rgb(136,187,77)"

    def test_green_above_100_percent(self):
        assert progress_fill_color(self._goal((0, 0), (3, 60)), 3) == "rgb(136,187,77)"

    def test_red_at_0_percent(self):
        assert progress_fill_color(self._goal((0, 0)), 3) == "rgb(187,102,77)"

    def test_midway_through_threshold(self):
        # relative progress 0.9 sits halfway between 0.8 and 1.0
        assert progress_fill_color(self._goal((0, 0), (10, 90)), 10) == "rgb(162,144,77)"

    def test_red_without_data(self):
        assert progress_fill_color(Goal(start=0, end=10), 3) == "rgb(187,102,77)"

    def test_custom_endpoints(self):
        color = progress_fill_color(
            self._goal((0, 0), (3, 30)), 3, threshold=0.5, behind=(255, 0, 0), ahead=(0, 255, 0)
        )
        assert color == "rgb(0,255,0)"


class TestProgressStatus:
    @staticmethod
    def _goal(*points, start=10 * DAY_MS, end=20 * DAY_MS):
        t = Trajectory()
        for d, v in points:
            t.insert(d, v)
        return Goal(start=start, end=end, target=100, trajectory=t)

    def test_before_start(self):
        goal = self._goal((10 * DAY_MS, 0))
        assert progress_status(goal, 7 * DAY_MS) == "3 days until start, nothing to do"

    def test_complete_ahead(self):
        goal = self._goal((10 * DAY_MS, 0), (12 * DAY_MS, 100))
        assert progress_status(goal, 12 * DAY_MS) == "complete, ahead of schedule"

    def test_complete(self):
        goal = self._goal((10 * DAY_MS, 0), (19 * DAY_MS, 100))
        assert progress_status(goal, 20 * DAY_MS) == "complete"

    def test_incomplete(self):
        goal = self._goal((10 * DAY_MS, 0), (19 * DAY_MS, 40))
        assert progress_status(goal, 21 * DAY_MS) == "incomplete @ 40.0%"

    def test_on_track(self):
        goal = self._goal((10 * DAY_MS, 0), (15 * DAY_MS, 60))
        assert progress_status(goal, 15 * DAY_MS) == "5 days left, on track @ 60.0%"

    def test_behind(self):
        goal = self._goal((10 * DAY_MS, 0), (15 * DAY_MS, 40))
        assert progress_status(goal, 15 * DAY_MS) == "5 days left, behind @ 40.0%"

    def test_no_data(self):
        assert progress_status(self._goal(), 15 * DAY_MS) == "no data"


class TestBudgetReport:
    @staticmethod
    def _goal(*points):
        t = Trajectory()
        for d, v in points:
            t.insert(d, v)
        return RegularGoal(window=10, target=7.5, total=10, trajectory=t)

    def test_within_budget(self):
        goal = self._goal((0, 0), (10 * DAY_MS, 8))
        assert budget_status(goal, 10 * DAY_MS) == "within budget"
        assert budget_summary(goal, 10 * DAY_MS) == "20% of budget remaining"

    def test_out_of_budget(self):
        goal = self._goal((0, 0), (10 * DAY_MS, 5))
        assert budget_status(goal, 10 * DAY_MS) == "out of budget"

    def test_partial_data_suffix(self):
        goal = self._goal((0, 0), (5 * DAY_MS, 5))
        assert budget_summary(goal, 5 * DAY_MS) == "100% of budget remaining (partial data)"

    def test_no_data(self):
        goal = self._goal()
        assert budget_status(goal, 0) == "no data"
        assert budget_summary(goal, 0) == "no data"

    def test_no_data_when_prorated_budget_is_undefined(self):
        goal = RegularGoal(
            window=10, target=5, total=5, trajectory=Trajectory().insert(0, 0).insert(5 * DAY_MS, 2.5)
        )
        assert budget_status(goal, 5 * DAY_MS) == "no data"
        assert budget_summary(goal, 5 * DAY_MS) == "no data"

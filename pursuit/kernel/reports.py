"""Human-readable status strings and the progress fill color.

Pure read-only consumers of Goal / RegularGoal state.
"""

from __future__ import annotations

import math

from pursuit.kernel.features import DAY_MS, clamp, divide, lerp
from pursuit.kernel.goals import Goal, RegularGoal

BEHIND_RGB: tuple[int, int, int] = (187, 102, 77)
AHEAD_RGB: tuple[int, int, int] = (136, 187, 77)

# (label, days per unit), finest first
_PERIODS: tuple[tuple[str, int], ...] = (("day", 1), ("week", 7), ("month", 30))


def velocity_report(goal: Goal, by_date: float, window_days: int = 30) -> str:
    """Actual vs required rate, in the finest period with at least one unit.

    Falls back to months when neither rate reaches one unit per week, and to
    "no data" when neither rate is defined.
    """
    v = goal.velocity_30d(by_date, window_days) * DAY_MS
    rv = goal.velocity_required(by_date) * DAY_MS
    if math.isnan(v) and math.isnan(rv):
        return "no data"

    label, n = _PERIODS[-1]
    for candidate, k in _PERIODS:
        if abs(v * k) >= 1 or abs(rv * k) >= 1:
            label, n = candidate, k
            break

    return (
        f"{window_days}d: {v * n:.1f} {goal.unit} per {label}; "
        f"now need {rv * n:.1f} {goal.unit} per {label}"
    )


def progress_fill_color(
    goal: Goal,
    by_date: float,
    threshold: float = 0.8,
    behind: tuple[int, int, int] = BEHIND_RGB,
    ahead: tuple[int, int, int] = AHEAD_RGB,
) -> str:
    """Interpolate from `behind` to `ahead` as relative progress climbs from
    `threshold` to 1.0. Clamped at both ends; NaN maps to `behind`.
    """
    w = clamp(divide(goal.relative_progress(by_date) - threshold, 1.0 - threshold))
    r, g, b = (round(lerp(lo, hi, w)) for lo, hi in zip(behind, ahead))
    return f"rgb({r},{g},{b})"


def progress_status(goal: Goal, by_date: float) -> str:
    """Classify the goal at `by_date` into a one-line status."""
    if by_date < goal.start:
        return f"{goal.days_until_start(by_date):.0f} days until start, nothing to do"

    progress = goal.progress
    if math.isnan(progress):
        return "no data"
    pct = f"{100 * progress:.1f}%"
    if progress >= 1.0:
        if by_date < goal.end:
            return "complete, ahead of schedule"
        return "complete"
    if by_date >= goal.end:
        return f"incomplete @ {pct}"

    days_left = f"{goal.days_until_end(by_date):.0f} days left"
    if goal.is_on_track(by_date):
        return f"{days_left}, on track @ {pct}"
    return f"{days_left}, behind @ {pct}"


# ---------------------------------------------------------------------------
# Regular goals
# ---------------------------------------------------------------------------

def budget_status(goal: RegularGoal, by_date: float) -> str:
    b = goal.budget_remaining_prorated(by_date)
    if math.isnan(b):
        return "no data"
    return "within budget" if b > 0 else "out of budget"


def budget_summary(goal: RegularGoal, by_date: float) -> str:
    b = goal.budget_remaining_prorated(by_date)
    if math.isnan(b):
        return "no data"
    summary = f"{100 * b:.0f}% of budget remaining"
    if goal.partial_data(by_date):
        summary += " (partial data)"
    return summary

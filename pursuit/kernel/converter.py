"""Stored documents ⇄ domain objects.

Trajectories are rebuilt by repeated insert on read, so an unsorted or
duplicated stored array is normalized. On write they are exported through
iteration, so the stored array is always sorted.
"""

from __future__ import annotations

from pursuit.kernel.goals import BudgetGoal, Goal, RegularGoal
from pursuit.kernel.models import (
    BudgetGoalDocument,
    GoalDocument,
    ObjectiveDocument,
    PointDocument,
    RegularGoalDocument,
)
from pursuit.kernel.objective import Objective
from pursuit.kernel.trajectory import Trajectory


def trajectory_from_points(points: list[PointDocument] | None) -> Trajectory:
    t = Trajectory()
    for p in points or []:
        t.insert(p.date, p.value)
    return t


def trajectory_to_points(trajectory: Trajectory) -> list[PointDocument]:
    return [PointDocument(date=p.date, value=p.value) for p in trajectory]


# ---------------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------------


def goal_from_document(goal_id: str, doc: GoalDocument) -> Goal:
    return Goal(
        id=goal_id,
        name=doc.name,
        unit=doc.unit,
        start=doc.start,
        end=doc.end,
        target=doc.target,
        stage=doc.stage,
        trajectory=trajectory_from_points(doc.trajectory),
    )


def goal_to_document(goal: Goal) -> GoalDocument:
    return GoalDocument(
        id=goal.id,
        name=goal.name,
        unit=goal.unit,
        start=goal.start,
        end=goal.end,
        target=goal.target,
        stage=goal.stage,
        trajectory=trajectory_to_points(goal.trajectory),
    )


def regular_goal_from_document(goal_id: str, doc: RegularGoalDocument) -> RegularGoal:
    return RegularGoal(
        id=goal_id,
        name=doc.name,
        description=doc.description,
        unit=doc.unit,
        window=doc.window,
        target=doc.target,
        total=doc.total,
        trajectory=trajectory_from_points(doc.trajectory),
    )


def regular_goal_to_document(goal: RegularGoal) -> RegularGoalDocument:
    return RegularGoalDocument(
        id=goal.id,
        name=goal.name,
        description=goal.description,
        unit=goal.unit,
        window=goal.window,
        target=goal.target,
        total=goal.total,
        trajectory=trajectory_to_points(goal.trajectory),
    )


def budget_goal_from_document(goal_id: str, doc: BudgetGoalDocument) -> BudgetGoal:
    return BudgetGoal(
        id=goal_id,
        name=doc.name,
        description=doc.description,
        target=doc.target,
        current=doc.current,
        last_updated=doc.last_updated,
    )


def budget_goal_to_document(goal: BudgetGoal) -> BudgetGoalDocument:
    return BudgetGoalDocument(
        id=goal.id,
        name=goal.name,
        description=goal.description,
        target=goal.target,
        current=goal.current,
        last_updated=goal.last_updated,
    )


# ---------------------------------------------------------------------------
# Objectives
# ---------------------------------------------------------------------------


def objective_from_document(doc: ObjectiveDocument) -> Objective:
    """Goal ids come from the collection keys, not the stored `id` fields."""
    return Objective(
        id=doc.id,
        name=doc.name,
        description=doc.description,
        goals={gid: goal_from_document(gid, g) for gid, g in doc.goals.items()},
        regular_goals={
            gid: regular_goal_from_document(gid, g) for gid, g in doc.regular_goals.items()
        },
        budget_goals={
            gid: budget_goal_from_document(gid, g) for gid, g in doc.budget_goals.items()
        },
    )


def objective_to_document(objective: Objective) -> ObjectiveDocument:
    return ObjectiveDocument(
        id=objective.id,
        name=objective.name,
        description=objective.description,
        goals={gid: goal_to_document(g) for gid, g in objective.goals.items()},
        regular_goals={
            gid: regular_goal_to_document(g) for gid, g in objective.regular_goals.items()
        },
        budget_goals={
            gid: budget_goal_to_document(g) for gid, g in objective.budget_goals.items()
        },
    )

"""Stored objective document shapes and HTTP payloads — Pydantic v2 models."""

from __future__ import annotations

import uuid
from enum import Enum

from pydantic import BaseModel, Field

from pursuit.kernel.goals import Stage


class GoalKind(str, Enum):
    goal = "goals"
    regular_goal = "regular_goals"
    budget_goal = "budget_goals"


# ---------------------------------------------------------------------------
# Stored documents
# ---------------------------------------------------------------------------


class PointDocument(BaseModel):
    date: int  # epoch ms
    value: float


class GoalDocument(BaseModel):
    id: str = ""
    name: str = ""
    unit: str = ""
    start: int = 0
    end: int = 0
    target: float = 1.0
    stage: Stage = Stage.pledged
    trajectory: list[PointDocument] | None = None  # absent reads as empty


class RegularGoalDocument(BaseModel):
    id: str = ""
    name: str = ""
    description: str = ""
    unit: str = ""
    window: int = 28  # days
    target: float = 0.0
    total: float = 0.0
    trajectory: list[PointDocument] | None = None


class BudgetGoalDocument(BaseModel):
    id: str = ""
    name: str = ""
    description: str = ""
    target: float = 0.0
    current: float = 0.0
    last_updated: int = 0


class ObjectiveDocument(BaseModel):
    """Top-level stored object; goal collections are keyed by goal id."""

    id: str
    name: str = ""
    description: str = ""
    goals: dict[str, GoalDocument] = Field(default_factory=dict)
    regular_goals: dict[str, RegularGoalDocument] = Field(default_factory=dict)
    budget_goals: dict[str, BudgetGoalDocument] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class SetValueRequest(BaseModel):
    value: float


class IncrementRequest(BaseModel):
    delta: float


class MoveGoalRequest(BaseModel):
    target_objective_id: str
    copy_only: bool = Field(default=False, alias="copy")

    model_config = {"populate_by_name": True}


class CreateObjectiveRequest(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str = "New objective"
    description: str = ""


class AddGoalRequest(BaseModel):
    name: str = "New goal"
    unit: str = ""
    target: float = 100.0
    duration_days: int = Field(default=7, ge=0)


class AddRegularGoalRequest(BaseModel):
    name: str = "New regular goal"
    description: str = ""
    unit: str = ""
    window: int | None = Field(default=None, gt=0)  # days; None uses the configured default
    total: float = 100.0
    target: float = 90.0


class UpdateGoalRequest(BaseModel):
    """Fields left unset keep their stored value."""

    name: str | None = None
    unit: str | None = None
    start: int | None = None
    end: int | None = None
    target: float | None = None
    stage: Stage | None = None


# ---------------------------------------------------------------------------
# Reports (NaN / inf metrics are serialized as null)
# ---------------------------------------------------------------------------


class GoalReport(BaseModel):
    id: str
    name: str
    unit: str = ""
    stage: Stage = Stage.pledged
    baseline: float | None = None
    current: float | None = None
    progress: float | None = None
    time_spent: float | None = None
    relative_progress: float | None = None
    on_track: bool = False
    velocity: float | None = None  # units per day
    velocity_required: float | None = None  # units per day
    status: str = ""
    velocity_summary: str = ""
    fill_color: str = ""


class RegularGoalReport(BaseModel):
    id: str
    name: str
    unit: str = ""
    value: float | None = None
    budget_remaining: float | None = None
    partial_data: bool = False
    status: str = ""
    summary: str = ""


class BudgetGoalReport(BaseModel):
    id: str
    name: str
    target: float
    current: float
    remaining: float
    used: float | None = None
    last_updated: int = 0


class ObjectiveReport(BaseModel):
    objective_id: str
    name: str = ""
    at: int  # epoch ms the report was evaluated at
    goals: list[GoalReport] = Field(default_factory=list)
    regular_goals: list[RegularGoalReport] = Field(default_factory=list)
    budget_goals: list[BudgetGoalReport] = Field(default_factory=list)

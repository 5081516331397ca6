"""Pursuit HTTP router — objective documents, reports & value updates."""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable

from fastapi import APIRouter, Depends, HTTPException, Query

from pursuit.config import settings
from pursuit.exceptions import GoalNotFoundError, ObjectiveExistsError, ObjectiveNotFoundError
from pursuit.kernel import reports
from pursuit.kernel.converter import objective_from_document, objective_to_document
from pursuit.kernel.features import DAY_MS, finite_or_none
from pursuit.kernel.goals import BudgetGoal, Goal, RegularGoal, Stage
from pursuit.kernel.models import (
    AddGoalRequest,
    AddRegularGoalRequest,
    BudgetGoalReport,
    CreateObjectiveRequest,
    GoalDocument,
    GoalKind,
    GoalReport,
    IncrementRequest,
    MoveGoalRequest,
    ObjectiveDocument,
    ObjectiveReport,
    RegularGoalDocument,
    RegularGoalReport,
    SetValueRequest,
    UpdateGoalRequest,
)
from pursuit.kernel.objective import Objective
from pursuit.kernel.store import InMemoryDocumentStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pursuit", tags=["pursuit"])


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def _parse_kind(value: str) -> GoalKind:
    try:
        return GoalKind(value)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown goal kind: {value}")


async def _load(store: InMemoryDocumentStore, objective_id: str) -> Objective:
    try:
        doc = await store.read_objective(objective_id)
    except ObjectiveNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return objective_from_document(doc)


# ---------------------------------------------------------------------------
# Report builders
# ---------------------------------------------------------------------------


def build_goal_report(goal: Goal, by_date: int) -> GoalReport:
    latest = goal.trajectory.latest
    return GoalReport(
        id=goal.id,
        name=goal.name,
        unit=goal.unit,
        stage=goal.stage,
        baseline=finite_or_none(goal.baseline),
        current=latest.value if latest else None,
        progress=finite_or_none(goal.progress),
        time_spent=finite_or_none(goal.time_spent(min(goal.end, by_date))),
        relative_progress=finite_or_none(goal.relative_progress(by_date)),
        on_track=goal.is_on_track(by_date),
        velocity=finite_or_none(goal.velocity_30d(by_date, settings.velocity_window_days) * DAY_MS),
        velocity_required=finite_or_none(goal.velocity_required(by_date) * DAY_MS),
        status=reports.progress_status(goal, by_date),
        velocity_summary=reports.velocity_report(goal, by_date, settings.velocity_window_days),
        fill_color=reports.progress_fill_color(
            goal,
            by_date,
            threshold=settings.fill_threshold,
            behind=settings.fill_behind_rgb,
            ahead=settings.fill_ahead_rgb,
        ),
    )


def build_regular_goal_report(goal: RegularGoal, by_date: int) -> RegularGoalReport:
    return RegularGoalReport(
        id=goal.id,
        name=goal.name,
        unit=goal.unit,
        value=finite_or_none(goal.value(by_date)),
        budget_remaining=finite_or_none(goal.budget_remaining_prorated(by_date)),
        partial_data=goal.partial_data(by_date),
        status=reports.budget_status(goal, by_date),
        summary=reports.budget_summary(goal, by_date),
    )


def build_budget_goal_report(goal: BudgetGoal) -> BudgetGoalReport:
    return BudgetGoalReport(
        id=goal.id,
        name=goal.name,
        target=goal.target,
        current=goal.current,
        remaining=goal.remaining,
        used=finite_or_none(goal.used),
        last_updated=goal.last_updated,
    )


def build_objective_report(objective: Objective, by_date: int) -> ObjectiveReport:
    return ObjectiveReport(
        objective_id=objective.id,
        name=objective.name,
        at=by_date,
        goals=[
            build_goal_report(g, by_date)
            for g in sorted(objective.goals.values(), key=lambda g: g.name)
            if g.stage != Stage.archived
        ],
        regular_goals=[
            build_regular_goal_report(g, by_date)
            for g in sorted(objective.regular_goals.values(), key=lambda g: g.name)
        ],
        budget_goals=[
            build_budget_goal_report(g)
            for g in sorted(objective.budget_goals.values(), key=lambda g: g.name)
        ],
    )


# ---------------------------------------------------------------------------
# /pursuit/objectives/{objective_id}
# ---------------------------------------------------------------------------


@router.get("/objectives", response_model=list[ObjectiveDocument])
async def list_objectives(
    store: InMemoryDocumentStore = Depends(get_store),
) -> list[ObjectiveDocument]:
    return await store.list_objectives()


@router.post("/objectives", response_model=ObjectiveDocument, status_code=201)
async def create_objective(
    body: CreateObjectiveRequest,
    store: InMemoryDocumentStore = Depends(get_store),
) -> ObjectiveDocument:
    doc = ObjectiveDocument(id=body.id, name=body.name, description=body.description)
    try:
        await store.create_objective(doc)
    except ObjectiveExistsError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return doc


@router.delete("/objectives/{objective_id}")
async def delete_objective(
    objective_id: str,
    store: InMemoryDocumentStore = Depends(get_store),
) -> dict[str, str]:
    try:
        await store.delete_objective(objective_id)
    except ObjectiveNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"status": "deleted", "objective_id": objective_id}


@router.get("/objectives/{objective_id}", response_model=ObjectiveDocument)
async def get_objective(
    objective_id: str,
    store: InMemoryDocumentStore = Depends(get_store),
) -> ObjectiveDocument:
    try:
        return await store.read_objective(objective_id)
    except ObjectiveNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/objectives/{objective_id}/report", response_model=ObjectiveReport)
async def get_objective_report(
    objective_id: str,
    store: InMemoryDocumentStore = Depends(get_store),
    at: int | None = Query(default=None, description="Evaluation time (epoch ms, default now)"),
) -> ObjectiveReport:
    objective = await _load(store, objective_id)
    return build_objective_report(objective, at if at is not None else _now_ms())


# ---------------------------------------------------------------------------
# Value updates
# ---------------------------------------------------------------------------


async def _update(
    store: InMemoryDocumentStore,
    objective_id: str,
    apply: Callable[[Objective, int], None],
) -> ObjectiveDocument:
    objective = await _load(store, objective_id)
    try:
        apply(objective, _now_ms())
    except GoalNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    doc = objective_to_document(objective)
    await store.write_objective(doc)
    return doc


@router.post("/objectives/{objective_id}/goals/{goal_id}/value", response_model=ObjectiveDocument)
async def set_goal_value(
    objective_id: str,
    goal_id: str,
    body: SetValueRequest,
    store: InMemoryDocumentStore = Depends(get_store),
) -> ObjectiveDocument:
    return await _update(
        store,
        objective_id,
        lambda o, now: o.set_goal_value(goal_id, body.value, now, settings.compaction_window_ms),
    )


@router.post(
    "/objectives/{objective_id}/goals/{goal_id}/increment", response_model=ObjectiveDocument
)
async def increment_goal_value(
    objective_id: str,
    goal_id: str,
    body: IncrementRequest,
    store: InMemoryDocumentStore = Depends(get_store),
) -> ObjectiveDocument:
    return await _update(
        store,
        objective_id,
        lambda o, now: o.increment_goal_value(goal_id, body.delta, now, settings.compaction_window_ms),
    )


@router.post(
    "/objectives/{objective_id}/regular_goals/{goal_id}/value", response_model=ObjectiveDocument
)
async def set_regular_goal_value(
    objective_id: str,
    goal_id: str,
    body: SetValueRequest,
    store: InMemoryDocumentStore = Depends(get_store),
) -> ObjectiveDocument:
    return await _update(
        store,
        objective_id,
        lambda o, now: o.set_regular_goal_value(
            goal_id, body.value, now, settings.compaction_window_ms
        ),
    )


@router.post(
    "/objectives/{objective_id}/regular_goals/{goal_id}/increment",
    response_model=ObjectiveDocument,
)
async def increment_regular_goal_value(
    objective_id: str,
    goal_id: str,
    body: IncrementRequest,
    store: InMemoryDocumentStore = Depends(get_store),
) -> ObjectiveDocument:
    return await _update(
        store,
        objective_id,
        lambda o, now: o.increment_regular_goal_value(
            goal_id, body.delta, now, settings.compaction_window_ms
        ),
    )


@router.post(
    "/objectives/{objective_id}/budget_goals/{goal_id}/value", response_model=ObjectiveDocument
)
async def set_budget_goal_value(
    objective_id: str,
    goal_id: str,
    body: SetValueRequest,
    store: InMemoryDocumentStore = Depends(get_store),
) -> ObjectiveDocument:
    return await _update(
        store,
        objective_id,
        lambda o, now: o.set_budget_goal_value(goal_id, body.value, now),
    )


# ---------------------------------------------------------------------------
# Goal editing
# ---------------------------------------------------------------------------


@router.post("/objectives/{objective_id}/goals", response_model=GoalDocument, status_code=201)
async def add_goal(
    objective_id: str,
    body: AddGoalRequest,
    store: InMemoryDocumentStore = Depends(get_store),
) -> GoalDocument:
    goal_id = str(uuid.uuid4())
    doc = await _update(
        store,
        objective_id,
        lambda o, now: o.add_goal(
            goal_id,
            now,
            name=body.name,
            unit=body.unit,
            target=body.target,
            duration_days=body.duration_days,
        ),
    )
    return doc.goals[goal_id]


@router.post(
    "/objectives/{objective_id}/regular_goals",
    response_model=RegularGoalDocument,
    status_code=201,
)
async def add_regular_goal(
    objective_id: str,
    body: AddRegularGoalRequest,
    store: InMemoryDocumentStore = Depends(get_store),
) -> RegularGoalDocument:
    goal_id = str(uuid.uuid4())
    window = body.window if body.window is not None else settings.default_regular_window_days
    doc = await _update(
        store,
        objective_id,
        lambda o, now: o.add_regular_goal(
            goal_id,
            now,
            name=body.name,
            description=body.description,
            unit=body.unit,
            window=window,
            total=body.total,
            target=body.target,
        ),
    )
    return doc.regular_goals[goal_id]


@router.patch("/objectives/{objective_id}/goals/{goal_id}", response_model=GoalDocument)
async def update_goal(
    objective_id: str,
    goal_id: str,
    body: UpdateGoalRequest,
    store: InMemoryDocumentStore = Depends(get_store),
) -> GoalDocument:
    doc = await _update(
        store,
        objective_id,
        lambda o, now: o.update_goal(goal_id, **body.model_dump(exclude_none=True)),
    )
    return doc.goals[goal_id]


@router.post("/objectives/{objective_id}/goals/{goal_id}/baseline", response_model=GoalDocument)
async def reset_goal_baseline(
    objective_id: str,
    goal_id: str,
    body: SetValueRequest,
    store: InMemoryDocumentStore = Depends(get_store),
) -> GoalDocument:
    doc = await _update(store, objective_id, lambda o, now: o.reset_baseline(goal_id, body.value))
    return doc.goals[goal_id]


@router.delete("/objectives/{objective_id}/goals/{goal_id}", response_model=ObjectiveDocument)
async def delete_goal(
    objective_id: str,
    goal_id: str,
    store: InMemoryDocumentStore = Depends(get_store),
) -> ObjectiveDocument:
    return await _update(store, objective_id, lambda o, now: o.delete_goal(goal_id))


@router.delete(
    "/objectives/{objective_id}/regular_goals/{goal_id}", response_model=ObjectiveDocument
)
async def delete_regular_goal(
    objective_id: str,
    goal_id: str,
    store: InMemoryDocumentStore = Depends(get_store),
) -> ObjectiveDocument:
    return await _update(store, objective_id, lambda o, now: o.delete_regular_goal(goal_id))


# ---------------------------------------------------------------------------
# Move / copy between objectives
# ---------------------------------------------------------------------------


@router.post("/objectives/{objective_id}/{kind}/{goal_id}/move")
async def move_goal(
    objective_id: str,
    kind: str,
    goal_id: str,
    body: MoveGoalRequest,
    store: InMemoryDocumentStore = Depends(get_store),
) -> dict[str, str]:
    goal_kind = _parse_kind(kind)
    try:
        await store.move_goal(
            goal_kind, goal_id, objective_id, body.target_objective_id, copy=body.copy_only
        )
    except (ObjectiveNotFoundError, GoalNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {
        "status": "copied" if body.copy_only else "moved",
        "goal_id": goal_id,
        "target_objective_id": body.target_objective_id,
    }

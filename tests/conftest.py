"""Shared fixtures for the test suite."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from pursuit.kernel.features import DAY_MS
from pursuit.kernel.models import (
    BudgetGoalDocument,
    GoalDocument,
    ObjectiveDocument,
    PointDocument,
    RegularGoalDocument,
)
from pursuit.kernel.store import InMemoryDocumentStore, get_store
from pursuit.main import app


def make_objective(objective_id: str = "fitness") -> ObjectiveDocument:
    """Objective with one goal of each kind, spanning the first 60 days of epoch."""
    return ObjectiveDocument(
        id=objective_id,
        name="Fitness",
        description="Get fit.",
        goals={
            "run": GoalDocument(
                id="run",
                name="Run",
                unit="km",
                start=0,
                end=60 * DAY_MS,
                target=180.0,
                trajectory=[
                    PointDocument(date=0, value=0.0),
                    PointDocument(date=30 * DAY_MS, value=135.0),
                ],
            ),
        },
        regular_goals={
            "sleep": RegularGoalDocument(
                id="sleep",
                name="Sleep",
                unit="nights",
                window=10,
                target=7.5,
                total=10.0,
                trajectory=[
                    PointDocument(date=0, value=0.0),
                    PointDocument(date=10 * DAY_MS, value=8.0),
                ],
            ),
        },
        budget_goals={
            "coffee": BudgetGoalDocument(id="coffee", name="Coffee", target=50.0, current=20.0),
        },
    )


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def store():
    """Return a store holding two objectives: `fitness` and an empty `reading`."""
    return InMemoryDocumentStore([make_objective(), ObjectiveDocument(id="reading", name="Reading")])


@pytest.fixture()
def override_store(store):
    """Override the FastAPI dependency so tests never share the module-level store."""
    async def _override():
        return store

    app.dependency_overrides[get_store] = _override
    yield store
    app.dependency_overrides.clear()


@pytest.fixture()
async def client(override_store):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

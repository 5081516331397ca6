"""Tests for stored document shapes and document ⇄ domain conversion."""

from pursuit.kernel.converter import (
    goal_from_document,
    goal_to_document,
    objective_from_document,
    objective_to_document,
    trajectory_from_points,
    trajectory_to_points,
)
from pursuit.kernel.goals import Goal, RegularGoal, Stage
from pursuit.kernel.models import (
    GoalDocument,
    MoveGoalRequest,
    ObjectiveDocument,
    PointDocument,
)
from pursuit.kernel.objective import Objective
from pursuit.kernel.trajectory import Trajectory

STORED = {
    "id": "11616568-c5f8-4e3f-9bc1-1c432bd361c2",
    "name": "name",
    "description": "description",
    "goals": {
        "d66c24f7-a7fd-4760-95be-401dc7b53935": {
            "name": "Shuttle Speed",
            "target": 2300,
            "start": 2490,
            "end": 5439,
            "trajectory": [
                {"date": 2490, "value": 0},
                {"date": 3622, "value": 110},
            ],
        }
    },
    "regular_goals": {
        "e156d27b-1182-433e-9ax3-f29c78b1a113": {
            "name": "name",
            "description": "description",
            "unit": "unit",
            "window": 10,
            "target": 7.5,
            "total": 10,
            "trajectory": [
                {"date": 2490, "value": 0},
                {"date": 3622, "value": 110},
            ],
        },
    },
}


class TestDocumentDefaults:
    def test_objective_without_goals(self):
        doc = ObjectiveDocument.model_validate({"id": "id", "name": "name"})
        assert doc.goals == {}
        assert doc.regular_goals == {}
        assert doc.budget_goals == {}

    def test_goal_trajectory_may_be_absent(self):
        doc = GoalDocument.model_validate({"name": "Distance"})
        assert doc.trajectory is None
        assert len(goal_from_document("distance", doc).trajectory) == 0

    def test_stage_defaults_to_pledged(self):
        assert GoalDocument().stage == Stage.pledged

    def test_move_request_accepts_copy_alias(self):
        req = MoveGoalRequest.model_validate({"target_objective_id": "b", "copy": True})
        assert req.copy_only is True


class TestTrajectoryConversion:
    def test_unsorted_points_are_normalized(self):
        t = trajectory_from_points(
            [
                PointDocument(date=30, value=3),
                PointDocument(date=10, value=1),
                PointDocument(date=30, value=4),
            ]
        )
        assert [(p.date, p.value) for p in t] == [(10, 1), (30, 4)]

    def test_export_is_sorted(self):
        t = Trajectory().insert(20, 2).insert(10, 1)
        assert [p.date for p in trajectory_to_points(t)] == [10, 20]

    def test_roundtrip(self):
        t = Trajectory().insert(3622, 110).insert(2490, 0)
        assert trajectory_from_points(trajectory_to_points(t)) == t


class TestObjectiveConversion:
    def test_from_document(self):
        objective = objective_from_document(ObjectiveDocument.model_validate(STORED))
        expected = Objective(
            id="11616568-c5f8-4e3f-9bc1-1c432bd361c2",
            name="name",
            description="description",
            goals={
                "d66c24f7-a7fd-4760-95be-401dc7b53935": Goal(
                    id="d66c24f7-a7fd-4760-95be-401dc7b53935",
                    name="Shuttle Speed",
                    target=2300,
                    start=2490,
                    end=5439,
                    trajectory=Trajectory().insert(2490, 0).insert(3622, 110),
                )
            },
            regular_goals={
                "e156d27b-1182-433e-9ax3-f29c78b1a113": RegularGoal(
                    id="e156d27b-1182-433e-9ax3-f29c78b1a113",
                    name="name",
                    description="description",
                    unit="unit",
                    window=10,
                    target=7.5,
                    total=10,
                    trajectory=Trajectory().insert(2490, 0).insert(3622, 110),
                )
            },
        )
        assert objective == expected

    def test_to_document(self):
        objective = objective_from_document(ObjectiveDocument.model_validate(STORED))
        data = objective_to_document(objective).model_dump(mode="json")
        goal = data["goals"]["d66c24f7-a7fd-4760-95be-401dc7b53935"]
        assert goal["id"] == "d66c24f7-a7fd-4760-95be-401dc7b53935"
        assert goal["start"] == 2490
        assert goal["stage"] == "pledged"
        assert goal["trajectory"] == [
            {"date": 2490, "value": 0.0},
            {"date": 3622, "value": 110.0},
        ]
        regular = data["regular_goals"]["e156d27b-1182-433e-9ax3-f29c78b1a113"]
        assert regular["window"] == 10
        assert regular["total"] == 10.0

    def test_goal_roundtrip(self):
        goal = Goal(
            id="g",
            name="Distance",
            unit="km",
            start=0,
            end=100,
            target=42,
            stage=Stage.draft,
            trajectory=Trajectory().insert(0, 0).insert(50, 21),
        )
        assert goal_from_document("g", goal_to_document(goal)) == goal

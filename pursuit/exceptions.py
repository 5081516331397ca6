"""Error types raised outside the pure kernel math."""


class PursuitError(Exception):
    """Base class for all pursuit errors."""


class ObjectiveNotFoundError(PursuitError):
    def __init__(self, objective_id: str):
        self.objective_id = objective_id
        super().__init__(f"No such objective: {objective_id!r}")


class GoalNotFoundError(PursuitError):
    """Raised when a goal id is missing from an objective's collection."""

    def __init__(self, goal_id: str, kind: str = "goal"):
        self.goal_id = goal_id
        self.kind = kind
        super().__init__(f"No such {kind.replace('_', ' ')}: {goal_id!r}")


class ObjectiveExistsError(PursuitError):
    def __init__(self, objective_id: str):
        self.objective_id = objective_id
        super().__init__(f"Objective already exists: {objective_id!r}")

"""Objective document store.

The remote store is an external collaborator; the kernel only needs
read / write of whole objective documents plus an atomic goal move.
`InMemoryDocumentStore` is the bundled implementation. Documents are
deep-copied in and out so callers never share state with the store.
"""

from __future__ import annotations

import asyncio
import logging

from pursuit.exceptions import GoalNotFoundError, ObjectiveExistsError, ObjectiveNotFoundError
from pursuit.kernel.models import GoalKind, ObjectiveDocument

logger = logging.getLogger(__name__)


class InMemoryDocumentStore:
    def __init__(self, objectives: list[ObjectiveDocument] | None = None):
        self._objectives: dict[str, ObjectiveDocument] = {}
        self._lock = asyncio.Lock()
        for doc in objectives or []:
            self._objectives[doc.id] = doc.model_copy(deep=True)

    def _get(self, objective_id: str) -> ObjectiveDocument:
        try:
            return self._objectives[objective_id]
        except KeyError:
            raise ObjectiveNotFoundError(objective_id) from None

    async def read_objective(self, objective_id: str) -> ObjectiveDocument:
        return self._get(objective_id).model_copy(deep=True)

    async def write_objective(self, doc: ObjectiveDocument) -> None:
        async with self._lock:
            self._objectives[doc.id] = doc.model_copy(deep=True)
        logger.debug("wrote objective %s", doc.id)

    async def list_objectives(self) -> list[ObjectiveDocument]:
        return [d.model_copy(deep=True) for d in self._objectives.values()]

    async def create_objective(self, doc: ObjectiveDocument) -> None:
        async with self._lock:
            if doc.id in self._objectives:
                raise ObjectiveExistsError(doc.id)
            self._objectives[doc.id] = doc.model_copy(deep=True)
        logger.info("created objective %s", doc.id)

    async def delete_objective(self, objective_id: str) -> None:
        async with self._lock:
            self._get(objective_id)
            del self._objectives[objective_id]
        logger.info("deleted objective %s", objective_id)

    async def move_goal(
        self,
        kind: GoalKind,
        goal_id: str,
        source_objective_id: str,
        target_objective_id: str,
        copy: bool = False,
    ) -> None:
        """Move (or copy) one goal record between objectives, all or nothing."""
        async with self._lock:
            source = self._get(source_objective_id)
            target = self._get(target_objective_id)
            source_goals = getattr(source, kind.value)
            if goal_id not in source_goals:
                raise GoalNotFoundError(goal_id, kind.name)

            record = source_goals[goal_id].model_copy(deep=True)
            if not copy:
                del source_goals[goal_id]
            getattr(target, kind.value)[goal_id] = record

        logger.info(
            "%s %s %s: %s -> %s",
            "copied" if copy else "moved",
            kind.name,
            goal_id,
            source_objective_id,
            target_objective_id,
        )


document_store = InMemoryDocumentStore()


async def get_store() -> InMemoryDocumentStore:
    return document_store

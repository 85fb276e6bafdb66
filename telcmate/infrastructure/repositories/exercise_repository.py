"""Repository for exercise data access."""

from __future__ import annotations

import logging
from typing import Any

from telcmate.domain.exercises.models import (
    BaseExercise,
    Exercise,
    ExercisePatch,
    parse_exercise,
)
from telcmate.domain.shared.models import (
    EXERCISES_COLLECTION,
    ExercisePart,
    ExerciseType,
)
from telcmate.infrastructure.stores.base import DocumentStore, StoredDocument

logger = logging.getLogger(__name__)


class ExerciseRepository:
    """Repository for managing exercise persistence.

    Holds no copy of the data: every read goes to the store, and every
    document read back is validated against the exercise union.
    """

    def __init__(self, store: DocumentStore, collection: str = EXERCISES_COLLECTION):
        """Initialize the exercise repository."""
        self.store = store
        self.collection = collection

    async def list_all(self) -> list[Exercise]:
        """Load all exercises in store order."""
        documents = await self.store.query(self.collection)
        return [self._to_exercise(doc) for doc in documents]

    async def list_by_type(self, exercise_type: ExerciseType | str) -> list[Exercise]:
        """Load exercises of one type."""
        filters = {"type": ExerciseType(exercise_type).value}
        documents = await self.store.query(self.collection, filters)
        return [self._to_exercise(doc) for doc in documents]

    async def list_by_type_and_part(
        self, exercise_type: ExerciseType | str, part: ExercisePart | str
    ) -> list[Exercise]:
        """Load exercises of one type and part."""
        filters = {
            "type": ExerciseType(exercise_type).value,
            "part": ExercisePart(part).value,
        }
        documents = await self.store.query(self.collection, filters)
        return [self._to_exercise(doc) for doc in documents]

    async def get_by_id(self, exercise_id: str) -> Exercise | None:
        """Load a single exercise, or None if the ID does not resolve."""
        document = await self.store.get(self.collection, exercise_id)
        if document is None:
            return None
        return self._to_exercise(document)

    async def create(self, exercise: Exercise) -> Exercise:
        """Store a new exercise and return it with its store-assigned ID.

        Any ID already set on the exercise is ignored.
        """
        exercise_id = await self.store.add(self.collection, exercise.to_document())
        logger.info(f"Created {exercise.type}/{exercise.part} exercise {exercise_id}")
        return exercise.with_id(exercise_id)

    async def update(
        self,
        exercise_id: str,
        patch: ExercisePatch,
        variant: type[BaseExercise],
    ) -> dict[str, Any]:
        """Merge the patched fields into the stored exercise.

        The store is not read first. ``variant`` must be the model of the
        stored record; fields it does not have, or values it would not
        accept, are rejected before anything is written.

        Returns:
            The ID together with the fields that were written.

        Raises:
            InvalidExerciseError: If the patch does not fit the variant.
            DocumentNotFoundError: If no exercise has this ID.
        """
        patch.check_fits(variant)
        fields = patch.to_fields()
        await self.store.update(self.collection, exercise_id, fields)
        logger.info(f"Updated exercise {exercise_id}: {', '.join(sorted(fields))}")
        return {"id": exercise_id, **fields}

    async def delete(self, exercise_id: str) -> bool:
        """Delete an exercise. Succeeds for IDs that do not exist."""
        await self.store.delete(self.collection, exercise_id)
        logger.info(f"Deleted exercise {exercise_id}")
        return True

    def _to_exercise(self, document: StoredDocument) -> Exercise:
        return parse_exercise(document.data, document.id)

"""Read-only access to the exercise catalog."""

from typing import Iterable, List, Optional, Protocol
from uuid import UUID

from fastapi import Depends
from sqlalchemy.orm import Session

from database import get_db
from models import ExerciseDB


class ExercisePool(Protocol):
    """Contract for the exercises a workout can be generated from."""

    def all_exercises(self) -> List[ExerciseDB]:
        """Return every exercise in a stable order."""
        ...

    def find(self, exercise_id: UUID) -> Optional[ExerciseDB]:
        """Return the exercise with `exercise_id`, or None if there is none."""
        ...

    def find_many(self, exercise_ids: Iterable[UUID]) -> List[ExerciseDB]:
        """Return the exercises for `exercise_ids`, in the order given.

        Unknown ids are skipped. An id given twice appears twice.
        """
        ...


class DatabaseExercisePool:
    """ExercisePool backed by the exercises table."""

    def __init__(self, db: Session):
        self._db = db

    def all_exercises(self) -> List[ExerciseDB]:
        return self._db.query(ExerciseDB).order_by(ExerciseDB.name, ExerciseDB.id).all()

    def find(self, exercise_id: UUID) -> Optional[ExerciseDB]:
        return self._db.get(ExerciseDB, exercise_id)

    def find_many(self, exercise_ids: Iterable[UUID]) -> List[ExerciseDB]:
        exercise_ids = list(exercise_ids)
        if not exercise_ids:
            return []

        found = {
            exercise.id: exercise
            for exercise in self._db.query(ExerciseDB)
            .filter(ExerciseDB.id.in_(set(exercise_ids)))
            .all()
        }
        return [found[i] for i in exercise_ids if i in found]


def get_exercise_pool(db: Session = Depends(get_db)) -> ExercisePool:
    """Dependency function that provides the exercise pool for a request."""
    return DatabaseExercisePool(db)

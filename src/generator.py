"""Randomized workout generation from the exercise pool."""

import random
from dataclasses import dataclass, field
from typing import List, Optional

from fastapi import Depends

from errors import InsufficientPoolError
from exercise_pool import ExercisePool, get_exercise_pool
from models import ExerciseDB


@dataclass
class GeneratedWorkout:
    """An unsaved workout draft and the exercises offered as swaps.

    `exercises` holds at most one cardio exercise, first. `swaps` holds
    every standard exercise that was drawn, in draw order.
    """

    exercises: List[ExerciseDB] = field(default_factory=list)
    swaps: List[ExerciseDB] = field(default_factory=list)


class WorkoutGenerator:
    """Builds workout drafts by sampling the exercise pool.

    A workout has at most one cardio activity: the first cardio exercise
    drawn is kept and any other cardio exercise is discarded. Standard
    exercises are offered back to the user as swap candidates.

    Args:
        pool: Source of exercises
        rng: Object with a `shuffle(list)` method (default: random.Random())
    """

    def __init__(self, pool: ExercisePool, rng: Optional[random.Random] = None):
        self.pool = pool
        self.rng = rng if rng is not None else random.Random()

    def draw(self, requested_size: int) -> List[ExerciseDB]:
        """Sample `requested_size` distinct exercises, at most one cardio.

        Raises:
            ValueError: If requested_size is not positive
            InsufficientPoolError: If the pool is too small
        """
        if requested_size < 1:
            raise ValueError(f"requested_size must be positive, got {requested_size}")

        exercises = list(self.pool.all_exercises())

        standard_count = sum(1 for e in exercises if not e.is_cardio)
        available = standard_count + min(len(exercises) - standard_count, 1)
        if available < requested_size:
            raise InsufficientPoolError(requested_size, available)

        self.rng.shuffle(exercises)

        drawn = []
        has_cardio = False
        for exercise in exercises:
            if exercise.is_cardio:
                if has_cardio:
                    continue
                has_cardio = True
            drawn.append(exercise)
            if len(drawn) == requested_size:
                break

        return drawn

    @staticmethod
    def partition(drawn: List[ExerciseDB], slots: int) -> GeneratedWorkout:
        """Split drawn exercises into a draft of `slots` exercises and swaps.

        Args:
            drawn: Exercises in draw order
            slots: Number of exercises the draft should hold

        Returns:
            GeneratedWorkout whose draft is the retained cardio exercise (if
            any) followed by the first standard exercises, and whose swaps are
            all drawn standard exercises
        """
        cardio = [e for e in drawn if e.is_cardio]
        standard = [e for e in drawn if not e.is_cardio]

        retained = cardio[:1] if slots > 0 else []
        standard_slots = max(slots - len(retained), 0)

        return GeneratedWorkout(
            exercises=retained + standard[:standard_slots],
            swaps=standard,
        )

    def generate(
        self, requested_size: int, slots: Optional[int] = None
    ) -> GeneratedWorkout:
        """Draw `requested_size` exercises and build a draft from them.

        Args:
            requested_size: Number of exercises to draw from the pool
            slots: Size of the draft (default: requested_size)

        Returns:
            Unsaved GeneratedWorkout

        Raises:
            ValueError: If requested_size is not positive
            InsufficientPoolError: If the pool cannot supply requested_size
                exercises
        """
        if slots is None:
            slots = requested_size

        return self.partition(self.draw(requested_size), slots)


def get_workout_generator(
    pool: ExercisePool = Depends(get_exercise_pool),
) -> WorkoutGenerator:
    """Dependency function that provides a workout generator."""
    return WorkoutGenerator(pool)

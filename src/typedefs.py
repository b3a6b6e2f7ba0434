import enum
from datetime import datetime
from typing import List
from uuid import UUID

from pydantic import BaseModel


class ExerciseCategory(str, enum.Enum):
    CARDIO = "cardio"
    STANDARD = "standard"


class Exercise(BaseModel):
    """Catalog exercise as returned by the API."""

    id: UUID
    name: str
    category: ExerciseCategory

    class Config:
        from_attributes = True


class WorkoutParams(BaseModel):
    """User-submitted workout fields.

    Exercise ids are linked to the new workout in the order given here.
    Name rules are checked by the controller so that a failed submission can
    be re-rendered rather than rejected outright.
    """

    name: str = ""
    exercise_ids: List[UUID] = []


class WorkoutCreateRequest(BaseModel):
    """Request model for creating a workout.

    `swap_ids` carries the swap candidates the user had on screen, so they
    can be shown again if the submission fails validation.
    """

    workout: WorkoutParams
    swap_ids: List[UUID] = []


class WorkoutSummaryResponse(BaseModel):
    """Response model for workout lists (without exercises)."""

    id: UUID
    name: str
    created_at: datetime

    class Config:
        from_attributes = True


class WorkoutResponse(BaseModel):
    """Response model for a single saved workout (with exercises)."""

    id: UUID
    name: str
    created_at: datetime
    exercises: List[Exercise]

    class Config:
        from_attributes = True


class WorkoutDraft(BaseModel):
    """An unsaved workout, either freshly generated or rejected on create."""

    id: UUID | None = None
    name: str | None = None
    exercises: List[Exercise]


class WorkoutFormResponse(BaseModel):
    """Everything needed to render the new-workout form.

    `swaps` are the standard exercises the user may substitute into the
    draft. `errors` is empty for a freshly generated draft.
    """

    workout: WorkoutDraft
    swaps: List[Exercise]
    errors: List[str] = []

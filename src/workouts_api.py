"""REST API endpoints for generating, saving and deleting workouts."""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from auth import AuthenticatedUser, require_login
from config import Settings, get_settings
from database import get_db
from errors import WorkoutAccessDenied
from exercise_pool import DatabaseExercisePool
from generator import WorkoutGenerator, get_workout_generator
from models import ExerciseDB, WorkoutDB, WorkoutExerciseDB
from typedefs import (
    Exercise,
    WorkoutCreateRequest,
    WorkoutDraft,
    WorkoutFormResponse,
    WorkoutResponse,
    WorkoutSummaryResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/workouts",
    tags=["workouts"],
    dependencies=[Depends(require_login)],
)


# ========== Helper Functions ==========


def to_exercises(exercises: List[ExerciseDB]) -> List[Exercise]:
    return [Exercise.model_validate(e) for e in exercises]


def list_workouts_for_owner(
    db: Session, user_id: UUID, skip: int = 0, limit: int = 100
) -> List[WorkoutDB]:
    """Query a user's workouts in creation order."""
    return (
        db.query(WorkoutDB)
        .filter(WorkoutDB.user_id == user_id)
        .order_by(WorkoutDB.created_at, WorkoutDB.id)
        .offset(skip)
        .limit(limit)
        .all()
    )


def get_owned_workout(
    db: Session, workout_id: UUID, user: AuthenticatedUser
) -> WorkoutDB:
    """Load a workout and check that `user` owns it.

    Raises:
        HTTPException: 404 if the workout does not exist
        WorkoutAccessDenied: If the workout belongs to another user
    """
    workout = db.get(WorkoutDB, workout_id)
    if not workout:
        raise HTTPException(status_code=404, detail="Workout not found")

    if workout.user_id != user.user_id:
        raise WorkoutAccessDenied(workout_id, user.user_id)

    return workout


def validate_workout(
    db: Session,
    user_id: UUID,
    name: str,
    exercises: List[ExerciseDB],
    exercise_ids: List[UUID],
) -> List[str]:
    """Check a submitted workout against the save rules.

    Args:
        db: Database session
        user_id: Owner of the workout being created
        name: Submitted workout name
        exercises: Exercises found for exercise_ids
        exercise_ids: Submitted exercise ids, in order

    Returns:
        List of error messages, empty when the workout can be saved
    """
    errors = []
    name = name.strip()

    if not name:
        errors.append("Name can't be blank")
    else:
        duplicate = (
            db.query(WorkoutDB.id)
            .filter(
                WorkoutDB.user_id == user_id,
                func.lower(WorkoutDB.name) == name.lower(),
            )
            .first()
        )
        if duplicate:
            errors.append("Name has already been taken")

    if not exercise_ids:
        errors.append("Exercises can't be empty")
    elif len(exercises) != len(exercise_ids):
        errors.append("Exercises must all exist")

    if sum(1 for e in exercises if e.is_cardio) > 1:
        errors.append("Exercises can include at most one cardio exercise")

    return errors


def link_exercises(
    db: Session, workout_id: UUID, exercise_ids: List[UUID]
) -> List[WorkoutExerciseDB]:
    """Attach exercises to a workout, keeping the order given."""
    links = [
        WorkoutExerciseDB(workout_id=workout_id, exercise_id=exercise_id, position=i)
        for i, exercise_id in enumerate(exercise_ids)
    ]
    db.add_all(links)
    return links


def rejected_form(
    form: WorkoutFormResponse, errors: List[str], user: AuthenticatedUser
) -> WorkoutFormResponse:
    logger.info(
        "Rejected workout %r for user %s: %s", form.workout.name, user.user_id, errors
    )
    return form.model_copy(update={"errors": errors})


# ========== API Endpoints ==========


@router.get("", response_model=List[WorkoutSummaryResponse])
def list_workouts(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(require_login),
) -> List[WorkoutSummaryResponse]:
    """List the authenticated user's workouts, oldest first.

    Args:
        skip: Number of workouts to skip (default: 0)
        limit: Maximum number of workouts to return (default: 100)
    """
    workouts = list_workouts_for_owner(db, user.user_id, skip=skip, limit=limit)
    return [WorkoutSummaryResponse.model_validate(w) for w in workouts]


@router.get("/new", response_model=WorkoutFormResponse)
def new_workout(
    settings: Settings = Depends(get_settings),
    generator: WorkoutGenerator = Depends(get_workout_generator),
) -> WorkoutFormResponse:
    """Generate a fresh, unsaved workout and its swap candidates.

    Draws workout_size + swap_count exercises and fills a draft of
    workout_size exercises. At most one cardio exercise is kept in the draft;
    every standard exercise drawn is offered as a swap.

    Raises:
        InsufficientPoolError: 422 if the catalog is too small
    """
    generated = generator.generate(
        settings.requested_size, slots=settings.workout_size
    )

    return WorkoutFormResponse(
        workout=WorkoutDraft(exercises=to_exercises(generated.exercises)),
        swaps=to_exercises(generated.swaps),
    )


@router.get("/{workout_id}", response_model=WorkoutResponse)
def get_workout(
    workout_id: UUID,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(require_login),
) -> WorkoutResponse:
    """Get a workout owned by the authenticated user.

    Responds 404 if the workout does not exist and an empty 403 if it
    belongs to someone else.
    """
    workout = get_owned_workout(db, workout_id, user)
    return WorkoutResponse.model_validate(workout)


@router.post(
    "",
    response_model=WorkoutFormResponse,
    responses={status.HTTP_302_FOUND: {"description": "Workout created"}},
)
def create_workout(
    request: WorkoutCreateRequest,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(require_login),
):
    """Save a workout for the authenticated user.

    On success, redirects to the new workout. If the submission breaks a
    save rule nothing is written; the form is returned again with the
    submitted workout (unsaved), the standard exercises named by swap_ids
    and the list of errors.
    """
    pool = DatabaseExercisePool(db)
    params = request.workout
    exercises = pool.find_many(params.exercise_ids)

    # Built before the insert so a rollback cannot expire them
    form = WorkoutFormResponse(
        workout=WorkoutDraft(name=params.name, exercises=to_exercises(exercises)),
        swaps=to_exercises(
            [e for e in pool.find_many(request.swap_ids) if not e.is_cardio]
        ),
    )

    errors = validate_workout(
        db, user.user_id, params.name, exercises, params.exercise_ids
    )
    if errors:
        return rejected_form(form, errors, user)

    workout = WorkoutDB(name=params.name.strip(), user_id=user.user_id)
    try:
        db.add(workout)
        db.flush()  # Get the ID without committing

        link_exercises(db, workout.id, params.exercise_ids)
        db.commit()
    except IntegrityError:
        # Another request saved the same name after validation
        db.rollback()
        return rejected_form(form, ["Name has already been taken"], user)

    logger.info(
        "Created workout %s with %d exercises for user %s",
        workout.id,
        len(params.exercise_ids),
        user.user_id,
    )
    return RedirectResponse(
        url=f"{router.prefix}/{workout.id}", status_code=status.HTTP_302_FOUND
    )


@router.delete(
    "/{workout_id}",
    status_code=status.HTTP_302_FOUND,
    response_class=RedirectResponse,
)
def delete_workout(
    workout_id: UUID,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(require_login),
):
    """Delete a workout owned by the authenticated user.

    The workout's exercise links are removed with it; the exercises are not.
    Redirects to the workout list.
    """
    workout = get_owned_workout(db, workout_id, user)

    db.delete(workout)
    db.commit()

    logger.info("Deleted workout %s for user %s", workout_id, user.user_id)
    return RedirectResponse(url=router.prefix, status_code=status.HTTP_302_FOUND)

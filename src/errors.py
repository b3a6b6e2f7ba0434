"""Domain errors and the handlers that turn them into HTTP responses."""

import logging
from uuid import UUID

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class InsufficientPoolError(Exception):
    """The exercise pool cannot supply the requested number of exercises."""

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(
            f"Cannot draw {requested} exercises, only {available} available"
        )


class WorkoutAccessDenied(Exception):
    """An authenticated user tried to access a workout they do not own."""

    def __init__(self, workout_id: UUID, user_id: UUID):
        self.workout_id = workout_id
        self.user_id = user_id
        super().__init__(f"User {user_id} does not own workout {workout_id}")


async def workout_access_denied_handler(
    request: Request, exc: WorkoutAccessDenied
) -> Response:
    # Empty body: nothing about the workout is revealed to a non-owner
    logger.warning(
        "Denied %s %s: %s", request.method, request.url.path, exc
    )
    return Response(status_code=status.HTTP_403_FORBIDDEN)


async def insufficient_pool_handler(
    request: Request, exc: InsufficientPoolError
) -> JSONResponse:
    logger.warning("Workout generation failed: %s", exc)
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(WorkoutAccessDenied, workout_access_denied_handler)
    app.add_exception_handler(InsufficientPoolError, insufficient_pool_handler)

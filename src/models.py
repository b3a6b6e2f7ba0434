"""SQLAlchemy database models."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship

from database import Base
from typedefs import ExerciseCategory


def utcnow() -> datetime:
    return datetime.now(UTC)


class UserDB(Base):
    """Database model for users.

    Users are created on their first authenticated request and are
    identified by their Firebase UID.
    """

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    firebase_uid = Column(String, nullable=False, unique=True, index=True)
    email = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    workouts = relationship(
        "WorkoutDB",
        back_populates="user",
        order_by="WorkoutDB.created_at",
    )

    def __repr__(self):
        return f"<UserDB(id={self.id}, email={self.email})>"


class ExerciseDB(Base):
    """Database model for catalog exercises.

    Exercises belong to the catalog, not to any user or workout, and are
    never modified or deleted through the API.
    """

    __tablename__ = "exercises"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False, unique=True)
    category = Column(
        Enum(ExerciseCategory, name="exercise_category"),
        nullable=False,
        default=ExerciseCategory.STANDARD,
    )
    created_at = Column(DateTime, nullable=False, default=utcnow)

    @property
    def is_cardio(self) -> bool:
        return self.category == ExerciseCategory.CARDIO

    def __repr__(self):
        return f"<ExerciseDB(id={self.id}, name={self.name}, category={self.category})>"


class WorkoutDB(Base):
    """Database model for workouts.

    A workout is owned by exactly one user for its whole lifetime. Its
    exercises are linked through WorkoutExerciseDB rows, ordered by position.
    """

    __tablename__ = "workouts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    user = relationship("UserDB", back_populates="workouts")
    workout_exercises = relationship(
        "WorkoutExerciseDB",
        order_by="WorkoutExerciseDB.position",
        back_populates="workout",
        cascade="all, delete-orphan",
    )

    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_user_workout_name"),)

    @property
    def exercises(self) -> list[ExerciseDB]:
        return [link.exercise for link in self.workout_exercises]

    def __repr__(self):
        return f"<WorkoutDB(id={self.id}, name={self.name}, user_id={self.user_id})>"


class WorkoutExerciseDB(Base):
    """Database model linking an exercise to a workout.

    `position` is the 0-based index at which the exercise was submitted.
    The same exercise may appear more than once in a workout.
    """

    __tablename__ = "workout_exercises"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    workout_id = Column(
        Uuid, ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False
    )
    exercise_id = Column(Uuid, ForeignKey("exercises.id"), nullable=False)
    position = Column(Integer, nullable=False)

    workout = relationship("WorkoutDB", back_populates="workout_exercises")
    exercise = relationship("ExerciseDB")

    __table_args__ = (
        UniqueConstraint("workout_id", "position", name="uq_workout_position"),
    )

    def __repr__(self):
        return (
            f"<WorkoutExerciseDB(workout_id={self.workout_id}, "
            f"exercise_id={self.exercise_id}, position={self.position})>"
        )

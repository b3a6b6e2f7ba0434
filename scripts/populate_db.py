#!/usr/bin/env python3
"""Script to populate the database with catalog exercises and sample workouts."""

import os
import sys

from dotenv import load_dotenv

# Add src to path so we can import our modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from database import SessionLocal  # noqa: E402
from models import ExerciseDB, UserDB, WorkoutDB, WorkoutExerciseDB  # noqa: E402
from typedefs import ExerciseCategory  # noqa: E402

# Load environment variables
load_dotenv()

STANDARD_EXERCISES = [
    "Barbell Squat",
    "Bench Press",
    "Deadlift",
    "Overhead Press",
    "Barbell Row",
    "Pull-ups",
    "Lunges",
    "Bicep Curls",
    "Tricep Dips",
    "Plank",
    "Romanian Deadlift",
    "Push-ups",
]

CARDIO_EXERCISES = [
    "Rowing",
    "Treadmill Run",
    "Stationary Bike",
    "Jump Rope",
]


def create_exercises():
    """Add any catalog exercises that are missing."""
    db = SessionLocal()
    try:
        existing = {name for (name,) in db.query(ExerciseDB.name).all()}

        catalog = [(name, ExerciseCategory.STANDARD) for name in STANDARD_EXERCISES]
        catalog += [(name, ExerciseCategory.CARDIO) for name in CARDIO_EXERCISES]

        created = [
            ExerciseDB(name=name, category=category)
            for name, category in catalog
            if name not in existing
        ]
        db.add_all(created)
        db.commit()

        print(f"Created {len(created)} exercises ({len(existing)} already present)")
        for exercise in created:
            print(f"  - {exercise.name} ({exercise.category.value})")

    except Exception as e:
        print(f"Error populating exercises: {e}")
        db.rollback()
        sys.exit(1)
    finally:
        db.close()


def create_test_workouts():
    """Create a sample workout for the first user."""
    db = SessionLocal()
    try:
        test_user = db.query(UserDB).first()
        if not test_user:
            print("No users found. Please create a test user first.")
            print("Use the Firebase Auth Emulator to create: test@example.com")
            return

        # Clear existing workouts for this user
        for workout in db.query(WorkoutDB).filter(WorkoutDB.user_id == test_user.id):
            db.delete(workout)
        db.commit()
        print(f"Cleared existing workouts for user {test_user.email}")

        exercises = (
            db.query(ExerciseDB)
            .filter(ExerciseDB.name.in_(["Rowing", "Barbell Squat", "Lunges"]))
            .order_by(ExerciseDB.name)
            .all()
        )
        if not exercises:
            print("No exercises found. Run with --exercises first.")
            return

        workout = WorkoutDB(name="Sample Leg Day", user_id=test_user.id)
        db.add(workout)
        db.flush()  # Get the workout ID
        db.add_all(
            WorkoutExerciseDB(workout_id=workout.id, exercise_id=e.id, position=i)
            for i, e in enumerate(exercises)
        )
        db.commit()

        print(f"\nCreated workout {workout.name} ({workout.id}):")
        for exercise in exercises:
            print(f"  - {exercise.name}")

    except Exception as e:
        print(f"Error populating workouts: {e}")
        db.rollback()
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Populate database with test data")
    parser.add_argument(
        "--exercises",
        action="store_true",
        help="Create catalog exercises",
    )
    parser.add_argument(
        "--workouts",
        action="store_true",
        help="Create a sample workout for the first user",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Run all population functions",
    )

    args = parser.parse_args()

    # If no args, default to --all
    if not (args.exercises or args.workouts or args.all):
        args.all = True

    if args.all or args.exercises:
        create_exercises()

    if args.all or args.workouts:
        create_test_workouts()

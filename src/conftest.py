"""Pytest configuration and shared fixtures."""

import os
from unittest.mock import MagicMock

# Keep the application engine off the production database during tests
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine, text  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from auth import AuthenticatedUser, FirebaseUser, require_login  # noqa: E402
from config import Settings, get_settings  # noqa: E402
from database import Base, get_db  # noqa: E402
from firebase_config import get_firebase_auth  # noqa: E402
from main import app  # noqa: E402
from models import ExerciseDB, UserDB, WorkoutDB  # noqa: E402
from typedefs import ExerciseCategory  # noqa: E402
from workouts_api import link_exercises  # noqa: E402


def get_test_db_url():
    """Get the test database URL from environment or use in-memory SQLite."""
    return os.environ.get("TEST_DATABASE_URL", "sqlite://")


def create_postgres_engine(db_url):
    """Recreate the test database from scratch and return an engine for it."""
    base_url, db_name = db_url.rsplit("/", 1)

    admin_engine = create_engine(f"{base_url}/postgres", isolation_level="AUTOCOMMIT")
    with admin_engine.connect() as conn:
        conn.execute(text(f"DROP DATABASE IF EXISTS {db_name}"))
        conn.execute(text(f"CREATE DATABASE {db_name}"))
    admin_engine.dispose()

    return create_engine(db_url, echo=False)


def drop_postgres_database(db_url):
    base_url, db_name = db_url.rsplit("/", 1)

    admin_engine = create_engine(f"{base_url}/postgres", isolation_level="AUTOCOMMIT")
    with admin_engine.connect() as conn:
        conn.execute(text(f"DROP DATABASE IF EXISTS {db_name}"))
    admin_engine.dispose()


@pytest.fixture(scope="session")
def test_engine():
    """Create a test database engine that persists for the entire test session."""
    db_url = get_test_db_url()
    is_postgres = db_url.startswith("postgresql")

    if is_postgres:
        engine = create_postgres_engine(db_url)
    else:
        # A single shared connection keeps the in-memory database alive and
        # visible to the threads TestClient runs endpoints on.
        engine = create_engine(
            db_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()

    if is_postgres:
        drop_postgres_database(db_url)


@pytest.fixture
def db_session(test_engine):
    """Create a new database session for each test.

    This fixture creates a transaction for each test and rolls it back
    after the test completes, ensuring test isolation.
    """
    connection = test_engine.connect()
    transaction = connection.begin()

    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=connection
    )
    session = TestingSessionLocal()

    yield session

    session.close()
    transaction.rollback()
    connection.close()


# Authentication fixtures


def make_user(db_session: Session, uid: str, email: str) -> UserDB:
    user = UserDB(firebase_uid=uid, email=email)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def authenticated(user: UserDB) -> AuthenticatedUser:
    return AuthenticatedUser(
        firebase_uid=user.firebase_uid,
        user_id=user.id,
        email=user.email,
        firebase_user=FirebaseUser(
            uid=user.firebase_uid,
            email=user.email,
            email_verified=True,
            claims={"uid": user.firebase_uid, "email": user.email},
        ),
    )


@pytest.fixture
def mock_firebase_auth():
    """Mock Firebase auth for testing."""
    mock_auth = MagicMock()
    app.dependency_overrides[get_firebase_auth] = lambda: mock_auth
    yield mock_auth
    app.dependency_overrides.pop(get_firebase_auth, None)


@pytest.fixture
def test_user(db_session: Session) -> UserDB:
    """Create a test user in the database."""
    return make_user(db_session, "test_firebase_uid_123", "test@example.com")


@pytest.fixture
def other_user(db_session: Session) -> UserDB:
    """Create a second user who owns nothing of test_user's."""
    return make_user(db_session, "other_firebase_uid_456", "other@example.com")


@pytest.fixture
def test_authenticated_user(test_user: UserDB) -> AuthenticatedUser:
    """Create a test authenticated user context."""
    return authenticated(test_user)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(workout_size=1, swap_count=3, _env_file=None)


@pytest.fixture
def sign_in_as():
    """Return a function that makes the test client act as the given user."""

    def sign_in(user: UserDB) -> AuthenticatedUser:
        current = authenticated(user)
        app.dependency_overrides[require_login] = lambda: current
        return current

    return sign_in


@pytest.fixture
def client(db_session, test_user, test_settings, sign_in_as):
    """Create test client signed in as test_user, with database overrides."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings
    sign_in_as(test_user)

    test_client = TestClient(app)
    yield test_client

    app.dependency_overrides.clear()


# Catalog fixtures


def make_exercise(
    db_session: Session,
    name: str,
    category: ExerciseCategory = ExerciseCategory.STANDARD,
) -> ExerciseDB:
    exercise = ExerciseDB(name=name, category=category)
    db_session.add(exercise)
    db_session.commit()
    db_session.refresh(exercise)
    return exercise


def make_workout(
    db_session: Session, user: UserDB, name: str, exercises=(), created_at=None
) -> WorkoutDB:
    workout = WorkoutDB(name=name, user_id=user.id)
    if created_at is not None:
        workout.created_at = created_at
    db_session.add(workout)
    db_session.flush()
    link_exercises(db_session, workout.id, [e.id for e in exercises])
    db_session.commit()
    db_session.refresh(workout)
    return workout


@pytest.fixture
def exercises(db_session):
    """A small catalog: three standard exercises and one cardio exercise."""
    return {
        "squats": make_exercise(db_session, "squats"),
        "lunges": make_exercise(db_session, "lunges"),
        "curls": make_exercise(db_session, "curls"),
        "rowing": make_exercise(db_session, "rowing", ExerciseCategory.CARDIO),
    }


@pytest.fixture
def create_exercise(db_session):
    """Return a function that adds an exercise to the catalog."""

    def create(name, category=ExerciseCategory.STANDARD):
        return make_exercise(db_session, name, category)

    return create


@pytest.fixture
def create_workout(db_session, test_user):
    """Return a function that saves a workout, owned by test_user by default."""

    def create(name="Leg Day", exercises=(), user=None, created_at=None):
        return make_workout(
            db_session, user or test_user, name, exercises, created_at=created_at
        )

    return create

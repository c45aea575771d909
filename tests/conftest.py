import os
from contextlib import ExitStack

TEST_DB_FILE = "test_course_registration.db"
TEST_DB_URL = f"sqlite:///./{TEST_DB_FILE}"

# must be set before app modules build their engine
os.environ["DATABASE_URL"] = TEST_DB_URL

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from app.core.current_user import Identity  # noqa: E402
from app.core.deps import get_db  # noqa: E402
from app.core.security import hash_password  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.main import app  # noqa: E402
from app.models.course import Course  # noqa: E402
from app.models.registration import Registration  # noqa: E402
from app.models.user import User  # noqa: E402

engine = create_engine(
    TEST_DB_URL,
    connect_args={"check_same_thread": False},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

PASSWORD = "password123"


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """Create a fresh schema once for the whole test session."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    if os.path.exists(TEST_DB_FILE):
        os.remove(TEST_DB_FILE)


@pytest.fixture(autouse=True)
def seed_data():
    """Admin plus two students, no courses."""
    db = TestingSessionLocal()
    try:
        # Clear tables (child -> parent)
        db.query(Registration).delete()
        db.query(Course).delete()
        db.query(User).delete()
        db.commit()

        hashed = hash_password(PASSWORD)
        db.add_all(
            [
                User(username="admin", email="admin@university.edu", role="admin", hashed_password=hashed),
                User(username="alice", email="alice@example.com", role="student", hashed_password=hashed),
                User(username="bob", email="bob@example.com", role="student", hashed_password=hashed),
            ]
        )
        db.commit()
        yield
    finally:
        db.close()


@pytest.fixture()
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


def identity_for(username: str) -> Identity:
    db = TestingSessionLocal()
    try:
        user = db.query(User).filter(User.username == username).one()
        return Identity(user_id=user.id, username=user.username, role=user.role)
    finally:
        db.close()


def add_course(code: str, day: str = "Monday", start: str = "09:00", end: str = "10:00", capacity: int = 30) -> int:
    db = TestingSessionLocal()
    try:
        course = Course(
            code=code,
            name=f"{code} course",
            instructor="Dr. Smith",
            credits=3,
            capacity=capacity,
            enrolled=0,
            day=day,
            start_time=start,
            end_time=end,
            semester="Fall 2026",
        )
        db.add(course)
        db.commit()
        return course.id
    finally:
        db.close()


def registration_count(course_id: int) -> int:
    db = TestingSessionLocal()
    try:
        return db.query(Registration).filter(Registration.course_id == course_id).count()
    finally:
        db.close()


def enrolled_counter(course_id: int) -> int:
    db = TestingSessionLocal()
    try:
        return db.get(Course, course_id).enrolled
    finally:
        db.close()


def login(client: TestClient, username: str, password: str = PASSWORD) -> dict:
    r = client.post("/api/login", json={"username": username, "password": password})
    assert r.status_code == 200, r.text
    return r.json()


@pytest.fixture()
def client():
    """Anonymous test client that uses the test DB session via dependency override."""
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def client_for():
    """Factory returning a client already logged in as the given user; each has its own cookie jar."""
    app.dependency_overrides[get_db] = override_get_db
    with ExitStack() as stack:

        def _make(username: str) -> TestClient:
            c = stack.enter_context(TestClient(app))
            login(c, username)
            return c

        yield _make
    app.dependency_overrides.clear()

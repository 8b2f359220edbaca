import os
from datetime import datetime, timedelta, timezone

TEST_DB_FILE = "test_classroom.db"
TEST_DB_URL = f"sqlite:///./{TEST_DB_FILE}"

# must be set before classroom.core.config is imported
os.environ.setdefault("DATABASE_URL", TEST_DB_URL)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from classroom.core.deps import get_db  # noqa: E402
from classroom.core.file_store import LocalFileStore, get_file_store  # noqa: E402
from classroom.core.security import hash_password  # noqa: E402
from classroom.db.base import Base  # noqa: E402
from classroom.main import app  # noqa: E402
from classroom.models.assignment import Assignment  # noqa: E402
from classroom.models.course import Course  # noqa: E402
from classroom.models.submission import Submission  # noqa: E402
from classroom.models.user import User, UserRole  # noqa: E402

PASSWORD = "password123"

COURSE_ID = "abcd1234-5e6f-4a7b-8c9d-0e1f2a3b4c5d"
ASSIGNMENT_ID = "a55e1000-0000-4000-8000-000000000001"
SUBMISSION_ID = "5ab00000-0000-4000-8000-000000000001"

engine = create_engine(
    TEST_DB_URL,
    connect_args={"check_same_thread": False},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


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


def _user(user_id: str, name: str, email: str, role: UserRole) -> User:
    return User(
        id=user_id,
        name=name,
        email=email,
        role=role,
        hashed_password=hash_password(PASSWORD),
    )


@pytest.fixture(autouse=True)
def seed_data():
    """
    Seed a clean minimal dataset for each test:

    - "Physics 101" taught by teacher1, co-taught by coteacher1
    - student1 enrolled and has submitted HW1 (no feedback yet)
    - student2 and outsider1 (a teacher) exist but belong to no course
    """
    db = TestingSessionLocal()
    try:
        # Clear tables (child -> parent)
        for table in reversed(Base.metadata.sorted_tables):
            db.execute(table.delete())
        db.commit()

        # Users
        teacher = _user("teacher-1", "Tina Teacher", "teacher1@example.com", UserRole.TEACHER)
        co_teacher = _user("coteacher-1", "Carl Co", "coteacher1@example.com", UserRole.TEACHER)
        outsider = _user("outsider-1", "Olga Outsider", "outsider1@example.com", UserRole.TEACHER)
        student1 = _user("student-1", "Sam Student", "student1@example.com", UserRole.STUDENT)
        student2 = _user("student-2", "Sue Student", "student2@example.com", UserRole.STUDENT)
        db.add_all([teacher, co_teacher, outsider, student1, student2])
        db.commit()

        # Course
        course = Course(
            id=COURSE_ID,
            name="Physics 101",
            description="Mechanics, waves and a little thermodynamics.",
            teacher_id=teacher.id,
        )
        course.co_teachers.append(co_teacher)
        course.students.append(student1)
        db.add(course)
        db.commit()

        # Assignment + one submission
        db.add(
            Assignment(
                id=ASSIGNMENT_ID,
                course_id=COURSE_ID,
                title="HW1",
                description="Problems 1-10 from chapter 2.",
                due_date=datetime.now(timezone.utc) + timedelta(days=1),
            )
        )
        db.commit()

        db.add(
            Submission(
                id=SUBMISSION_ID,
                assignment_id=ASSIGNMENT_ID,
                student_id=student1.id,
                summary="my answers",
            )
        )
        db.commit()

        yield
    finally:
        db.close()


@pytest.fixture()
def client(tmp_path):
    """Test client that uses the test DB session and a temp file store."""
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_file_store] = lambda: LocalFileStore(
        tmp_path, "http://files.test"
    )
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


def login(client, email: str, password: str = PASSWORD) -> str:
    r = client.post("/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["access_token"]


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def as_user(client, email: str) -> dict:
    return auth_header(login(client, email))

"""
Pytest configuration and fixtures for the API tests
"""

import itertools

import pytest
from starlette.testclient import TestClient

from courses_api.config import Settings
from courses_api.core.database import Database
from courses_api.main import get_application
from courses_api.models.course import Course
from courses_api.models.enrollment import Enrollment
from courses_api.models.user import User


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway SQLite file"""
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        ENVIRONMENT="test",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def database(settings):
    """Isolated store with the schema created"""
    database = Database(settings.DATABASE_URL)
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def client(settings, database):
    """FastAPI test client bound to the isolated store"""
    app = get_application(settings, database=database)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def make_course(database):
    """Insert a course, generating a unique title unless one is given"""
    counter = itertools.count(1)

    def _make_course(title=None, description=None):
        with database.session() as session:
            course = Course(
                title=title or f"Generated Course {next(counter)}",
                description=description,
            )
            session.add(course)
            session.commit()
            return course

    return _make_course


@pytest.fixture
def make_user(database):
    """Insert a user, generating a unique email unless one is given"""
    counter = itertools.count(1)

    def _make_user(first_name="Test", last_name="User", email=None):
        with database.session() as session:
            user = User(
                first_name=first_name,
                last_name=last_name,
                email=email or f"generated{next(counter)}@example.com",
            )
            session.add(user)
            session.commit()
            return user

    return _make_user


@pytest.fixture
def make_enrollment(database, make_user, make_course):
    """Insert an enrollment, creating its user and course when not given"""

    def _make_enrollment(user_id=None, course_id=None):
        user_id = user_id or make_user().id
        course_id = course_id or make_course().id
        with database.session() as session:
            enrollment = Enrollment(user_id=user_id, course_id=course_id)
            session.add(enrollment)
            session.commit()
            return enrollment

    return _make_enrollment

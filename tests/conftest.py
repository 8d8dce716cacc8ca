"""
Pytest fixtures for DevConnect tests.

Each test gets a fresh SQLite file. The application talks to it through
aiosqlite; fixtures seed and inspect it through a plain synchronous
SQLAlchemy session on the same file.
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from devconnect.config import Settings
from devconnect.db import Base
from devconnect.models import User

TEST_JWT_SECRET = "test-secret-key-with-at-least-32-characters"


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "devconnect_test.db"


@pytest.fixture
def test_settings(db_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{db_path}",
        jwt_secret_key=TEST_JWT_SECRET,
        github_token="test-github-token",
        github_api_url="https://api.github.test",
    )


@pytest.fixture(scope="function")
def test_db(db_path):
    """Create a fresh test database and return a session factory for it."""
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    yield TestingSessionLocal

    engine.dispose()


@pytest.fixture
def make_user(test_db):
    """Factory inserting a user and returning its ID."""
    counter = {"n": 0}

    def _make_user(name: str = "Jane Doe", avatar: str | None = "http://example.com/avatar.png") -> int:
        counter["n"] += 1
        session = test_db()
        try:
            user = User(name=name, email=f"user{counter['n']}@example.com", avatar=avatar)
            session.add(user)
            session.commit()
            return user.id
        finally:
            session.close()

    return _make_user


@pytest.fixture
def sample_profile_payload():
    """Create/update body as a frontend would send it."""
    return {
        "company": "Acme",
        "website": "https://acme.example.com",
        "location": "Berlin",
        "status": "Developer",
        "skills": "python, fastapi ,sql",
        "bio": "Backend developer",
        "githubusername": "octocat",
        "twitter": "https://twitter.com/jane",
        "linkedin": "https://linkedin.com/in/jane",
    }


@pytest.fixture
def sample_experience():
    return {
        "title": "Backend Engineer",
        "company": "Acme",
        "location": "Berlin",
        "from": "2019-01-01",
        "to": "",
        "current": True,
        "description": "APIs",
    }


@pytest.fixture
def sample_education():
    return {
        "school": "TU Berlin",
        "degree": "BSc",
        "fieldofstudy": "Computer Science",
        "from": "2014-10-01",
        "to": "2018-09-30",
    }

"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Seed companies and jobs
- Bearer tokens for a regular user and an admin
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db, make_engine
from app.core.security import create_access_token
from app.crud import company as company_crud
from app.crud import job as job_crud
from app.models import Company, Job  # noqa: F401  register tables
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = make_engine(SQLALCHEMY_TEST_DATABASE_URL, poolclass=StaticPool)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def companies(db_session):
    """Seed companies c1, c2, c3 (1, 2, 3 employees)"""
    seeded = []
    for n in (1, 2, 3):
        seeded.append(company_crud.create(db_session, {
            "handle": f"c{n}",
            "name": f"C{n}",
            "description": f"Desc{n}",
            "numEmployees": n,
            "logoUrl": f"http://c{n}.img",
        }))
    return seeded


@pytest.fixture
def jobs(db_session, companies):
    """Seed two jobs at c1: j1 (100000, no equity) and j2 (120000, equity 0.1)"""
    return [
        job_crud.create(db_session, {
            "title": "j1", "salary": 100000, "equity": "0", "company_handle": "c1",
        }),
        job_crud.create(db_session, {
            "title": "j2", "salary": 120000, "equity": "0.1", "company_handle": "c1",
        }),
    ]


@pytest.fixture
def user_headers():
    token = create_access_token({"username": "u1", "isAdmin": False})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    token = create_access_token({"username": "admin", "isAdmin": True})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def sample_job_data():
    """Sample job data for testing"""
    return {
        "title": "Full Stack Developer",
        "salary": 100000,
        "equity": "0.5",
        "company_handle": "c1",
    }

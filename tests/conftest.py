# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Set test environment before importing app
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["SEED_DEMO_DATA"] = "false"

from expense_approval.database import get_db
from expense_approval.events import event_bus
from expense_approval.main import app
from expense_approval.models import User, UserRole
from expense_approval.models.base import Base
from expense_approval.security import get_password_hash

# Test database setup
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_PASSWORD = "testpassword123"  # nosec - test-only secret  # noqa: S105


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_event_bus():
    """Drop subscriptions made by a test."""
    yield
    event_bus.clear()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database override."""

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
def make_user(db_session):
    """Factory persisting a principal with the test password."""

    def factory(
        name: str,
        email: str,
        role: UserRole = UserRole.EMPLOYEE,
        department: str | None = None,
        is_active: bool = True,
    ) -> User:
        user = User(
            name=name,
            email=email,
            hashed_password=get_password_hash(TEST_PASSWORD),
            role=role,
            department=department,
            is_active=is_active,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return factory


@pytest.fixture
def employee(make_user) -> User:
    """Create an employee."""
    return make_user("John Employee", "employee@example.com", department="Marketing")


@pytest.fixture
def other_employee(make_user) -> User:
    """Create a second employee."""
    return make_user("Emily Johnson", "emily@example.com", department="Sales")


@pytest.fixture
def manager(make_user) -> User:
    """Create a manager."""
    return make_user(
        "Sarah Manager", "manager@example.com", UserRole.MANAGER, "Finance"
    )


@pytest.fixture
def admin(make_user) -> User:
    """Create an admin."""
    return make_user("David Admin", "admin@example.com", UserRole.ADMIN, "Operations")


@pytest.fixture
def login_as(client):
    """Log the client in as a principal, replacing any previous session."""

    def do_login(user: User, password: str = TEST_PASSWORD) -> TestClient:
        response = client.post(
            "/api/v1/auth/login", json={"email": user.email, "password": password}
        )
        assert response.status_code == 200, response.text
        return client

    return do_login


@pytest.fixture
def user_password() -> str:
    """Password of every principal created by ``make_user``."""
    return TEST_PASSWORD

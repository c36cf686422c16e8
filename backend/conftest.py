"""
Pytest configuration file for backend testing.
"""
import os
import sys
from pathlib import Path

# Add the backend directory to Python path so imports work correctly
backend_dir = Path(__file__).parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

# Settings are read at import time; keep tests on an in-memory database
# and make password hashing cheap.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "1024")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from core.auth import build_token_claims, create_access_token
from core.database import Base, build_engine, get_db
import modules.models_registry  # noqa: F401
from modules.auth.domain.user import ROLE_ADMIN, User
from modules.auth.models.user_models import UserModel
from tests.factories import use_session

TEST_PASSWORD = "password123"

engine = build_engine("sqlite://")
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """Fresh schema for every test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    use_session(session)
    try:
        yield session
    finally:
        use_session(None)
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    from app.main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _create_user(db, email: str, name: str, roles=None) -> User:
    user = User.create(email=email, plain_password=TEST_PASSWORD, name=name, roles=roles)
    db.add(UserModel.from_domain(user))
    db.commit()
    return user


def _headers_for(user: User) -> dict:
    claims = build_token_claims(user.id, user.email.value, user.name, user.roles)
    return {"Authorization": f"Bearer {create_access_token(claims)}"}


@pytest.fixture
def admin_user(db_session) -> User:
    return _create_user(db_session, "admin@hr-system.com", "HR Administrator", [ROLE_ADMIN])


@pytest.fixture
def regular_user(db_session) -> User:
    return _create_user(db_session, "user@hr-system.com", "HR User")


@pytest.fixture
def admin_headers(admin_user) -> dict:
    return _headers_for(admin_user)


@pytest.fixture
def user_headers(regular_user) -> dict:
    return _headers_for(regular_user)

import time

import pytest
from jose import jwt

from hr_client.token_storage import MemoryTokenStorage

BASE_URL = "http://hr.test/api"

USER = {"id": "user-1", "email": "admin@hr-system.com", "name": "HR Administrator", "roles": ["ROLE_USER", "ROLE_ADMIN"]}


@pytest.fixture
def make_token():
    """Build a signed JWT whose exp is ``expires_in`` seconds from now."""

    def _make(expires_in: int = 3600, **claims) -> str:
        payload = {"sub": "user-1", "exp": int(time.time()) + expires_in, **claims}
        return jwt.encode(payload, "client-test-secret", algorithm="HS256")

    return _make


@pytest.fixture
def storage():
    return MemoryTokenStorage()


@pytest.fixture
def user():
    return dict(USER)

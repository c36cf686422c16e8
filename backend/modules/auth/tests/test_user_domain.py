# backend/modules/auth/tests/test_user_domain.py

"""
Tests for the User aggregate and password hashing.
"""

import pytest

from core.password_security import hash_password, needs_rehash, verify_password
from modules.auth.domain.user import ROLE_ADMIN, ROLE_USER, HashedPassword, User
from modules.auth.models.user_models import UserModel


def make_user(**overrides) -> User:
    data = {"email": "jane@hr-system.com", "plain_password": "password123", "name": "Jane Admin"}
    data.update(overrides)
    return User.create(**data)


class TestPasswordHashing:
    def test_hash_and_verify(self):
        hashed = hash_password("password123")
        assert hashed.startswith("$argon2")
        assert verify_password("password123", hashed)
        assert not verify_password("wrong-password", hashed)

    def test_malformed_hash_never_verifies(self):
        assert verify_password("password123", "not-a-hash") is False

    def test_fresh_hash_does_not_need_rehash(self):
        assert not needs_rehash(hash_password("password123"))


class TestHashedPassword:
    def test_minimum_length(self):
        with pytest.raises(ValueError, match="at least 8 characters"):
            HashedPassword.from_plain_password("short")

    def test_repr_is_masked(self):
        hashed = HashedPassword.from_plain_password("password123")
        assert repr(hashed) == "HashedPassword(***)"
        assert hashed.value not in repr(hashed)
        assert hashed.verify("password123")

    def test_empty_hash_rejected(self):
        with pytest.raises(ValueError):
            HashedPassword("")


class TestUser:
    def test_create_defaults(self):
        user = make_user()
        assert user.roles == [ROLE_USER]
        assert user.is_active
        assert not user.is_admin
        assert user.verify_password("password123")

    def test_email_is_validated(self):
        with pytest.raises(ValueError, match="Invalid email format"):
            make_user(email="not-an-email")

    def test_roles(self):
        user = make_user(roles=["role_admin"])
        assert user.roles == [ROLE_USER, ROLE_ADMIN]
        assert user.is_admin

        user.add_role(ROLE_ADMIN)
        assert user.roles.count(ROLE_ADMIN) == 1

        user.remove_role(ROLE_ADMIN)
        assert not user.is_admin

    def test_invalid_role(self):
        with pytest.raises(ValueError, match="Invalid role"):
            make_user(roles=["manager"])

    def test_base_role_cannot_be_removed(self):
        with pytest.raises(ValueError):
            make_user().remove_role(ROLE_USER)

    def test_update_password(self):
        user = make_user()
        user.update_password("new-password-1")
        assert user.verify_password("new-password-1")
        assert not user.verify_password("password123")
        assert user.updated_at is not None

    def test_deactivate_and_login(self):
        user = make_user()
        user.deactivate()
        assert not user.is_active
        user.record_login()
        assert user.last_login_at is not None


class TestUserModelMapping:
    def test_round_trip(self, db_session):
        user = make_user(roles=[ROLE_ADMIN])
        db_session.add(UserModel.from_domain(user))
        db_session.commit()
        db_session.expire_all()

        restored = db_session.get(UserModel, user.id).to_domain()
        assert restored.email == user.email
        assert restored.roles == [ROLE_USER, ROLE_ADMIN]
        assert restored.verify_password("password123")

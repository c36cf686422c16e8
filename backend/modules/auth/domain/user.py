# backend/modules/auth/domain/user.py

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from core.password_security import (
    MIN_PASSWORD_LENGTH,
    hash_password,
    needs_rehash,
    verify_password,
)
from core.values import Email, require_text, utcnow

ROLE_USER = "ROLE_USER"
ROLE_ADMIN = "ROLE_ADMIN"


@dataclass(frozen=True, slots=True)
class HashedPassword:
    value: str

    def __post_init__(self) -> None:
        require_text(self.value, "Password hash cannot be empty")

    @classmethod
    def from_plain_password(cls, plain_password: str) -> "HashedPassword":
        if plain_password is None or len(plain_password) < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )
        return cls(hash_password(plain_password))

    def verify(self, plain_password: str) -> bool:
        return verify_password(plain_password, self.value)

    @property
    def needs_rehash(self) -> bool:
        return needs_rehash(self.value)

    def __repr__(self) -> str:
        return "HashedPassword(***)"


@dataclass(eq=False)
class User:
    id: str
    email: Email
    name: str
    password: HashedPassword
    roles: List[str] = field(default_factory=lambda: [ROLE_USER])
    is_active: bool = True
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        email: str,
        plain_password: str,
        name: str,
        roles: Optional[List[str]] = None,
        user_id: Optional[str] = None,
    ) -> "User":
        user = cls(
            id=user_id or str(uuid.uuid4()),
            email=Email(email),
            name=require_text(name, "Name cannot be empty"),
            password=HashedPassword.from_plain_password(plain_password),
        )
        for role in roles or []:
            user.add_role(role)
        return user

    def _touch(self) -> None:
        self.updated_at = utcnow()

    def verify_password(self, plain_password: str) -> bool:
        return self.password.verify(plain_password)

    def update_password(self, plain_password: str) -> None:
        self.password = HashedPassword.from_plain_password(plain_password)
        self._touch()

    def update_email(self, email: str) -> None:
        self.email = Email(email)
        self._touch()

    def rename(self, name: str) -> None:
        self.name = require_text(name, "Name cannot be empty")
        self._touch()

    def add_role(self, role: str) -> None:
        role = require_text(role, "Role cannot be empty").upper()
        if not role.startswith("ROLE_"):
            raise ValueError(f"Invalid role: {role}")
        if role not in self.roles:
            self.roles = [*self.roles, role]
            self._touch()

    def remove_role(self, role: str) -> None:
        if role == ROLE_USER:
            raise ValueError(f"{ROLE_USER} cannot be removed")
        if role in self.roles:
            self.roles = [r for r in self.roles if r != role]
            self._touch()

    def has_role(self, role: str) -> bool:
        return role in self.roles

    @property
    def is_admin(self) -> bool:
        return self.has_role(ROLE_ADMIN)

    def record_login(self) -> None:
        self.last_login_at = utcnow()

    def activate(self) -> None:
        self.is_active = True
        self._touch()

    def deactivate(self) -> None:
        self.is_active = False
        self._touch()

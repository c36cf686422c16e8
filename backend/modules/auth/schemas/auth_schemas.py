# backend/modules/auth/schemas/auth_schemas.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from core.password_security import MIN_PASSWORD_LENGTH
from core.schema_types import CamelModel

from ..domain.user import ROLE_USER, User


class LoginRequest(BaseModel):
    """Credentials are optional here so a missing field answers 401, not 422"""

    email: Optional[str] = None
    password: Optional[str] = None


class RefreshRequest(BaseModel):
    refresh_token: Optional[str] = None


class UserSummary(BaseModel):
    id: str
    email: str
    name: str
    roles: List[str]

    @classmethod
    def from_domain(cls, user: User) -> "UserSummary":
        return cls(id=user.id, email=user.email.value, name=user.name, roles=list(user.roles))


class TokenResponse(BaseModel):
    token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserSummary
    message: str = "Login successful"


def _normalize_roles(roles: Optional[List[str]]) -> Optional[List[str]]:
    if roles is None:
        return roles
    normalized = []
    for role in roles:
        role = role.strip().upper()
        if not role.startswith("ROLE_"):
            raise ValueError(f"Invalid role: {role}")
        if role not in normalized:
            normalized.append(role)
    return normalized


class UserCreate(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)
    name: str = Field(..., min_length=1, max_length=255)
    roles: List[str] = Field(default_factory=lambda: [ROLE_USER])
    is_active: bool = True

    @field_validator("roles")
    @classmethod
    def validate_roles(cls, v):
        return _normalize_roles(v)


class UserUpdate(CamelModel):
    """Full replacement of a user (PUT); password stays unchanged when omitted"""

    email: EmailStr
    name: str = Field(..., min_length=1, max_length=255)
    roles: List[str]
    is_active: bool
    password: Optional[str] = Field(None, min_length=MIN_PASSWORD_LENGTH)

    @field_validator("roles")
    @classmethod
    def validate_roles(cls, v):
        return _normalize_roles(v)


class UserPatch(CamelModel):
    email: Optional[EmailStr] = None
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    roles: Optional[List[str]] = None
    is_active: Optional[bool] = None
    password: Optional[str] = Field(None, min_length=MIN_PASSWORD_LENGTH)

    @field_validator("roles")
    @classmethod
    def validate_roles(cls, v):
        return _normalize_roles(v)


class UserRead(CamelModel):
    id: str
    email: str
    name: str
    roles: List[str]
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, user: User) -> "UserRead":
        return cls(
            id=user.id,
            email=user.email.value,
            name=user.name,
            roles=list(user.roles),
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
            last_login_at=user.last_login_at,
        )

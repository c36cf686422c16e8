# backend/modules/auth/models/user_models.py

from sqlalchemy import JSON, Boolean, Column, DateTime, String

from core.database import Base
from core.mixins import TimestampMixin
from core.values import Email

from ..domain.user import HashedPassword, User


class UserModel(Base, TimestampMixin):
    """API user account used for authentication only"""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    email = Column(String(180), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    password = Column(String(255), nullable=False)
    roles = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True)
    last_login_at = Column(DateTime, nullable=True)

    @classmethod
    def from_domain(cls, user: User) -> "UserModel":
        model = cls(id=user.id)
        model.apply_domain(user)
        return model

    def apply_domain(self, user: User) -> None:
        self.email = user.email.value
        self.name = user.name
        self.password = user.password.value
        self.roles = list(user.roles)
        self.is_active = user.is_active
        self.created_at = user.created_at
        self.updated_at = user.updated_at
        self.last_login_at = user.last_login_at

    def to_domain(self) -> User:
        return User(
            id=self.id,
            email=Email(self.email),
            name=self.name,
            password=HashedPassword(self.password),
            roles=list(self.roles or []),
            is_active=self.is_active,
            created_at=self.created_at,
            updated_at=self.updated_at,
            last_login_at=self.last_login_at,
        )

    def __repr__(self):
        return f"<User {self.email}>"

# backend/modules/auth/services/user_service.py

import logging
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from core.exceptions import ConflictError, NotFoundError
from core.pagination import PageParams, paginate

from ..domain.user import ROLE_USER, User
from ..models.user_models import UserModel
from ..schemas.auth_schemas import UserCreate, UserPatch, UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    """Admin management of API users"""

    def __init__(self, db: Session):
        self.db = db

    def _get_model(self, user_id: str) -> UserModel:
        model = self.db.get(UserModel, user_id)
        if not model:
            raise NotFoundError(detail=f"User with ID {user_id} not found")
        return model

    def _ensure_email_available(self, email: str, exclude_id: Optional[str] = None) -> None:
        query = self.db.query(UserModel).filter(func.lower(UserModel.email) == email.lower())
        if exclude_id:
            query = query.filter(UserModel.id != exclude_id)
        if query.first():
            raise ConflictError(
                detail=f"User with email {email} already exists", error_code="DUPLICATE_EMAIL"
            )

    def create_user(self, data: UserCreate) -> User:
        user = User.create(
            email=data.email,
            plain_password=data.password,
            name=data.name,
            roles=data.roles,
        )
        if not data.is_active:
            user.deactivate()
        self._ensure_email_available(user.email.value)

        model = UserModel.from_domain(user)
        self.db.add(model)
        self.db.commit()
        self.db.refresh(model)
        logger.info(f"Created user {model.email} with roles {model.roles}")
        return model.to_domain()

    def get_user(self, user_id: str) -> User:
        return self._get_model(user_id).to_domain()

    def list_users(self, params: PageParams) -> Tuple[List[User], int]:
        query = self.db.query(UserModel).order_by(UserModel.email)
        models, total = paginate(query, params)
        return [model.to_domain() for model in models], total

    def update_user(self, user_id: str, data: UserUpdate) -> User:
        return self._save_changes(user_id, data.model_dump(), replace_roles=True)

    def patch_user(self, user_id: str, data: UserPatch) -> User:
        return self._save_changes(user_id, data.model_dump(exclude_unset=True))

    def _save_changes(self, user_id: str, changes: dict, replace_roles: bool = False) -> User:
        model = self._get_model(user_id)
        user = model.to_domain()
        changes = {key: value for key, value in changes.items() if value is not None}

        if "email" in changes and changes["email"].lower() != user.email.value.lower():
            user.update_email(changes["email"])
            self._ensure_email_available(user.email.value, exclude_id=user.id)
        if "name" in changes:
            user.rename(changes["name"])
        if "password" in changes:
            user.update_password(changes["password"])
        if "roles" in changes or replace_roles:
            wanted = set(changes.get("roles", [])) | {ROLE_USER}
            for role in list(user.roles):
                if role not in wanted:
                    user.remove_role(role)
            for role in changes.get("roles", []):
                user.add_role(role)
        if changes.get("is_active") is True:
            user.activate()
        elif changes.get("is_active") is False:
            user.deactivate()

        model.apply_domain(user)
        self.db.commit()
        self.db.refresh(model)
        return model.to_domain()

    def delete_user(self, user_id: str) -> None:
        model = self._get_model(user_id)
        self.db.delete(model)
        self.db.commit()
        logger.info(f"Deleted user {model.email}")

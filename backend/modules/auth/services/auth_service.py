# backend/modules/auth/services/auth_service.py

"""
Login, token refresh and user lookups for JWT authentication.
"""

import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from core.auth import (
    REFRESH_TOKEN,
    build_token_claims,
    create_access_token,
    create_refresh_token,
    verify_token,
)
from core.config import settings
from core.exceptions import AuthenticationError

from ..domain.user import HashedPassword, User
from ..models.user_models import UserModel
from ..schemas.auth_schemas import TokenResponse, UserSummary

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> Optional[UserModel]:
        return (
            self.db.query(UserModel)
            .filter(func.lower(UserModel.email) == email.strip().lower())
            .first()
        )

    def authenticate(self, email: Optional[str], password: Optional[str]) -> User:
        """
        Check credentials and record the login.

        Raises:
            AuthenticationError: missing credentials, unknown email,
                wrong password or inactive account
        """
        if not email or not password:
            raise AuthenticationError(
                detail="Email and password are required", error_code="CREDENTIALS_MISSING"
            )

        model = self.find_by_email(email)
        if model is None:
            logger.warning(f"Login attempt for unknown email {email}")
            raise AuthenticationError(detail="Invalid credentials", error_code="INVALID_CREDENTIALS")

        user = model.to_domain()
        if not user.verify_password(password):
            logger.warning(f"Invalid password for {email}")
            raise AuthenticationError(detail="Invalid credentials", error_code="INVALID_CREDENTIALS")

        if not user.is_active:
            raise AuthenticationError(detail="Account is disabled", error_code="ACCOUNT_DISABLED")

        if user.password.needs_rehash:
            user.password = HashedPassword.from_plain_password(password)
        user.record_login()

        model.apply_domain(user)
        self.db.commit()
        logger.info(f"User {user.email} logged in")
        return user

    def issue_tokens(self, user: User, message: str = "Login successful") -> TokenResponse:
        claims = build_token_claims(user.id, user.email.value, user.name, user.roles)
        return TokenResponse(
            token=create_access_token(claims),
            refresh_token=create_refresh_token(claims),
            expires_in=settings.jwt_access_token_expire_minutes * 60,
            user=UserSummary.from_domain(user),
            message=message,
        )

    def login(self, email: Optional[str], password: Optional[str]) -> TokenResponse:
        return self.issue_tokens(self.authenticate(email, password))

    def refresh(self, refresh_token: Optional[str]) -> TokenResponse:
        """Exchange a valid refresh token for a new token pair."""
        if not refresh_token:
            raise AuthenticationError(detail="Refresh token is required", error_code="TOKEN_MISSING")

        token_data = verify_token(refresh_token, token_type=REFRESH_TOKEN)
        if token_data is None:
            raise AuthenticationError(detail="Invalid refresh token", error_code="INVALID_TOKEN")

        model = self.db.get(UserModel, token_data.user_id)
        if model is None or not model.is_active:
            raise AuthenticationError(detail="Invalid refresh token", error_code="INVALID_TOKEN")

        return self.issue_tokens(model.to_domain(), message="Token refreshed")

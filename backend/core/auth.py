"""
JWT authentication for the HR API.

Issues access/refresh token pairs, verifies bearer tokens and provides
the FastAPI dependencies used by the routers to resolve the current
user and enforce roles.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import BaseModel
from sqlalchemy.orm import Session

from .config import settings
from .database import get_db
from .exceptions import AuthenticationError, PermissionError
from modules.auth.domain.user import ROLE_ADMIN, ROLE_USER
from modules.auth.models.user_models import UserModel

logger = logging.getLogger(__name__)

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"

security = HTTPBearer(auto_error=False)


class TokenData(BaseModel):
    """Token payload data."""

    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None
    roles: List[str] = []
    token_id: Optional[str] = None
    token_type: str = ACCESS_TOKEN
    expires_at: Optional[datetime] = None


class CurrentUser(BaseModel):
    """Authenticated user resolved for the current request."""

    id: str
    email: str
    name: str
    roles: List[str]
    is_active: bool = True

    def has_role(self, role: str) -> bool:
        return role in self.roles

    @property
    def is_admin(self) -> bool:
        return ROLE_ADMIN in self.roles


def generate_token_id() -> str:
    """Generate a unique token ID for tracking."""
    return secrets.token_urlsafe(32)


def _encode(data: dict, token_type: str, expires_delta: timedelta) -> str:
    now = datetime.now(timezone.utc)
    to_encode = data.copy()
    to_encode.update(
        {
            "exp": now + expires_delta,
            "iat": now,
            "type": token_type,
            "jti": generate_token_id(),
            "iss": settings.jwt_issuer,
            "aud": settings.jwt_audience,
        }
    )
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_access_token_expire_minutes)
    return _encode(data, ACCESS_TOKEN, expires_delta)


def create_refresh_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT refresh token with longer expiration."""
    if expires_delta is None:
        expires_delta = timedelta(days=settings.jwt_refresh_token_expire_days)
    return _encode(data, REFRESH_TOKEN, expires_delta)


def build_token_claims(user_id: str, email: str, name: str, roles: List[str]) -> dict:
    return {"sub": user_id, "email": email, "name": name, "roles": list(roles)}


def verify_token(token: str, token_type: str = ACCESS_TOKEN) -> Optional[TokenData]:
    """
    Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        token_type: Expected token type ("access" or "refresh")

    Returns:
        TokenData if valid, None otherwise
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
            options={"require_exp": True, "require_iat": True, "leeway": settings.jwt_leeway_seconds},
        )
    except ExpiredSignatureError:
        logger.info("Token has expired")
        return None
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        return None

    if payload.get("type") != token_type:
        logger.warning(f"Token type mismatch: expected {token_type}, got {payload.get('type')}")
        return None

    sub = payload.get("sub")
    if not sub:
        return None

    return TokenData(
        user_id=str(sub),
        email=payload.get("email"),
        name=payload.get("name"),
        roles=payload.get("roles", []),
        token_id=payload.get("jti"),
        token_type=token_type,
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )


def _credentials_exception() -> AuthenticationError:
    return AuthenticationError(detail="Could not validate credentials", error_code="INVALID_TOKEN")


async def get_token_data(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> TokenData:
    """Extract and verify the bearer access token."""
    if not credentials:
        raise AuthenticationError(detail="Authentication required", error_code="TOKEN_MISSING")

    token_data = verify_token(credentials.credentials)
    if token_data is None:
        raise _credentials_exception()
    return token_data


def get_current_user(
    token_data: TokenData = Depends(get_token_data),
    db: Session = Depends(get_db),
) -> CurrentUser:
    """Resolve the current authenticated user and make sure it is still active."""
    user = db.get(UserModel, token_data.user_id)
    if user is None or not user.is_active:
        raise _credentials_exception()

    return CurrentUser(
        id=user.id,
        email=user.email,
        name=user.name,
        roles=list(user.roles or []),
        is_active=user.is_active,
    )


def require_roles(*required_roles: str):
    """Enforce that the current user holds at least one of the specified roles."""
    required_set = set(required_roles)

    def dependency(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if current_user.is_admin or required_set & set(current_user.roles):
            return current_user
        raise PermissionError(
            detail=f"Operation requires one of these roles: {sorted(required_set)}"
        )

    return dependency


require_admin = require_roles(ROLE_ADMIN)

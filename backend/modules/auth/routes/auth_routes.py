# backend/modules/auth/routes/auth_routes.py

"""
Authentication endpoints: login, refresh, logout and the current user.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.auth import CurrentUser, get_current_user
from core.database import get_db

from ..schemas.auth_schemas import LoginRequest, RefreshRequest, TokenResponse, UserRead
from ..services.auth_service import AuthService
from ..services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])


@router.post("/login_check", response_model=TokenResponse)
@router.post("/auth/login", response_model=TokenResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """
    Exchange email and password for an access/refresh token pair.

    Raises:
        401: Missing or invalid credentials, or a disabled account
    """
    return AuthService(db).login(credentials.email, credentials.password)


@router.post("/login")
def login_info():
    """Usage hint for clients posting to the legacy endpoint."""
    return {
        "message": "Use POST /api/login_check or /api/auth/login with JSON credentials",
        "example": {"email": "admin@hr-system.com", "password": "password123"},
    }


@router.post("/auth/refresh", response_model=TokenResponse)
def refresh_token(body: RefreshRequest, db: Session = Depends(get_db)):
    """Issue a new token pair from a refresh token."""
    return AuthService(db).refresh(body.refresh_token)


@router.post("/auth/logout")
def logout(current_user: CurrentUser = Depends(get_current_user)):
    """Tokens are stateless; clients drop them on logout."""
    logger.info(f"User {current_user.email} logged out")
    return {"message": "Logout successful"}


@router.get("/auth/me", response_model=UserRead, response_model_by_alias=True)
def me(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return UserRead.from_domain(UserService(db).get_user(current_user.id))

# backend/hr_client/session.py

import logging
from typing import Any, Dict, List, Optional

import httpx

from .errors import ApiError
from .http_client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, HttpClient
from .token_storage import TokenStorage, is_token_expired

logger = logging.getLogger(__name__)


class AuthSession:
    """Login state for one API user, backed by the client's token storage."""

    def __init__(self, http: HttpClient):
        self.http = http
        self.storage = http.storage
        self.user: Optional[Dict[str, Any]] = None
        self.token: Optional[str] = None
        self.error: Optional[str] = None

    def initialize(self) -> None:
        """Restore a stored session, dropping it if the access token expired."""
        data = self.storage.get_auth_data()
        if data["token"] and data["user"] and not is_token_expired(data["token"]):
            self.token = data["token"]
            self.user = data["user"]
        else:
            self.storage.clear_auth_data()
            self.token = None
            self.user = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token and self.user and self.storage.is_authenticated())

    @property
    def roles(self) -> List[str]:
        return list((self.user or {}).get("roles") or [])

    def has_role(self, role: str) -> bool:
        return role in self.roles

    @property
    def is_admin(self) -> bool:
        return self.has_role("ROLE_ADMIN")

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        self.error = None
        try:
            response = await self.http.post(
                "/auth/login", json={"email": email, "password": password}, auth=False
            )
        except ApiError as e:
            self.error = e.message
            raise

        data = response.json()
        self.storage.set_auth_data(data["token"], data.get("refresh_token"), data.get("user"))
        self.token = data["token"]
        self.user = data.get("user")
        logger.info(f"Logged in as {email}")
        return self.user

    async def logout(self) -> None:
        """Clear the local session even when the server call fails."""
        if self.token:
            try:
                await self.http.post("/auth/logout")
            except ApiError as e:
                logger.warning(f"Logout request failed: {e.message}")
        self.storage.clear_auth_data()
        self.token = None
        self.user = None
        self.error = None

    async def refresh_profile(self) -> Dict[str, Any]:
        if not self.token:
            raise ApiError("SERVER_ERROR", "No authentication token", status=401)
        try:
            response = await self.http.get("/auth/me")
        except ApiError as e:
            self.error = e.message
            raise
        self.user = response.json()
        self.token = self.storage.get_token()
        self.storage.set_user(self.user)
        return self.user

    async def validate_token(self) -> bool:
        if not self.token:
            return False
        try:
            await self.refresh_profile()
        except ApiError:
            await self.logout()
            return False
        return True

    def clear_error(self) -> None:
        self.error = None


_session: Optional[AuthSession] = None


def init_session(
    base_url: str = DEFAULT_BASE_URL,
    storage: Optional[TokenStorage] = None,
    timeout: float = DEFAULT_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AuthSession:
    """Create the process-wide session; call once at startup."""
    global _session
    _session = AuthSession(HttpClient(base_url, storage=storage, timeout=timeout, transport=transport))
    _session.initialize()
    return _session


def get_session() -> AuthSession:
    if _session is None:
        raise RuntimeError("Session not initialized; call init_session() first")
    return _session


async def close_session() -> None:
    global _session
    if _session is not None:
        await _session.http.aclose()
        _session = None

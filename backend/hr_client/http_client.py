# backend/hr_client/http_client.py

"""
Authenticated HTTP client for the HR API.

Attaches the stored bearer token to each request. When a request comes
back 401 because the access token expired, the client refreshes it with
the stored refresh token and replays the request. Concurrent callers
share one in-flight refresh: the first 401 starts it, later ones await
the same task, and all of them replay with the new token. A failed
refresh clears stored credentials and fails every waiting caller.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from .errors import ApiError, TokenRefreshError
from .token_storage import MemoryTokenStorage, TokenStorage, is_token_expired

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api"
DEFAULT_TIMEOUT = 10.0
REFRESH_PATH = "/auth/refresh"


class HttpClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        storage: Optional[TokenStorage] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.storage = storage or MemoryTokenStorage()
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )
        self._refresh_task: Optional[asyncio.Task] = None

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _send(self, method: str, url: str, token: Optional[str], **kwargs) -> httpx.Response:
        headers: Dict[str, str] = dict(kwargs.pop("headers", None) or {})
        if token and not is_token_expired(token):
            headers["Authorization"] = f"Bearer {token}"
        try:
            return await self._client.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            raise ApiError.from_exception(e) from e

    async def request(self, method: str, url: str, auth: bool = True, **kwargs) -> httpx.Response:
        """
        Send a request and return the response.

        Raises ``ApiError`` for network failures and error statuses.
        With ``auth=False`` no token is attached and no refresh is attempted.
        """
        sent_token = self.storage.get_token() if auth else None
        response = await self._send(method, url, sent_token, **kwargs)

        if auth and response.status_code == 401:
            response = await self._handle_unauthorized(method, url, sent_token, response, **kwargs)

        if response.status_code >= 400:
            raise ApiError.from_response(response)
        return response

    async def _handle_unauthorized(
        self,
        method: str,
        url: str,
        sent_token: Optional[str],
        response: httpx.Response,
        **kwargs,
    ) -> httpx.Response:
        token = self.storage.get_token()
        refresh_token = self.storage.get_refresh_token()

        if not token or not refresh_token:
            self.storage.clear_auth_data()
            return response

        # Another caller already refreshed while this request was in flight.
        if token != sent_token and not is_token_expired(token):
            return await self._send(method, url, token, **kwargs)

        if not is_token_expired(token):
            return response

        new_token = await self.refresh_access_token(refresh_token)
        return await self._send(method, url, new_token, **kwargs)

    async def refresh_access_token(self, refresh_token: str) -> str:
        if self._refresh_task is None:
            self._refresh_task = asyncio.ensure_future(self._do_refresh(refresh_token))
            self._refresh_task.add_done_callback(self._forget_refresh_task)
        return await asyncio.shield(self._refresh_task)

    def _forget_refresh_task(self, task: asyncio.Task) -> None:
        if self._refresh_task is task:
            self._refresh_task = None

    async def _do_refresh(self, refresh_token: str) -> str:
        # Goes straight to the transport so a 401 here cannot trigger another refresh.
        logger.info("Refreshing access token")
        try:
            response = await self._client.post(REFRESH_PATH, json={"refresh_token": refresh_token})
        except httpx.HTTPError as e:
            self.storage.clear_auth_data()
            raise TokenRefreshError(f"Token refresh failed: {e}", status=None) from e

        if response.status_code != 200:
            self.storage.clear_auth_data()
            logger.warning(f"Token refresh rejected with status {response.status_code}")
            raise TokenRefreshError(status=response.status_code)

        data = response.json()
        new_token = data["token"]
        self.storage.set_auth_data(
            new_token,
            data.get("refresh_token") or refresh_token,
            data.get("user") or self.storage.get_user(),
        )
        return new_token

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def put(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PUT", url, **kwargs)

    async def patch(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PATCH", url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("DELETE", url, **kwargs)

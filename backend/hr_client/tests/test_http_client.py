# backend/hr_client/tests/test_http_client.py

"""
Tests for bearer token handling and the shared token refresh.
"""

import asyncio
import json

import httpx
import pytest

from hr_client.errors import NETWORK_ERROR, NOT_FOUND, SERVER_ERROR, ApiError, TokenRefreshError
from hr_client.http_client import HttpClient

from .conftest import BASE_URL, USER


def make_client(storage, handler) -> HttpClient:
    return HttpClient(BASE_URL, storage=storage, transport=httpx.MockTransport(handler))


class FakeApi:
    """Accepts only ``valid_token`` and answers refresh calls with ``new_token``."""

    def __init__(self, valid_token, new_token=None, refresh_status=200):
        self.valid_token = valid_token
        self.new_token = new_token
        self.refresh_status = refresh_status
        self.refresh_calls = 0
        self.requests = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        # Let concurrent callers interleave.
        await asyncio.sleep(0)
        self.requests.append(request)

        if request.url.path == "/api/auth/refresh":
            self.refresh_calls += 1
            if self.refresh_status != 200:
                return httpx.Response(self.refresh_status, json={"detail": "Invalid refresh token"})
            body = json.loads(request.content)
            return httpx.Response(
                200,
                json={"token": self.new_token, "refresh_token": f"{body['refresh_token']}-next", "user": USER},
            )

        if request.headers.get("Authorization") not in {f"Bearer {t}" for t in (self.valid_token, self.new_token) if t}:
            return httpx.Response(401, json={"detail": "Authentication required", "error_code": "TOKEN_MISSING"})
        return httpx.Response(200, json={"path": request.url.path})


class TestRequests:
    @pytest.mark.asyncio
    async def test_attaches_valid_token(self, storage, make_token):
        token = make_token()
        storage.set_auth_data(token, "refresh-1", USER)
        api = FakeApi(valid_token=token)

        async with make_client(storage, api) as http:
            response = await http.get("/employees")

        assert response.json() == {"path": "/api/employees"}
        assert api.requests[0].headers["Authorization"] == f"Bearer {token}"
        assert api.refresh_calls == 0

    @pytest.mark.asyncio
    async def test_unauthenticated_request_skips_token(self, storage, make_token):
        storage.set_auth_data(make_token(), "refresh-1", USER)

        async def handler(request):
            assert "Authorization" not in request.headers
            return httpx.Response(200, json={"token": "t"})

        async with make_client(storage, handler) as http:
            await http.post("/auth/login", json={"email": "a@b.c", "password": "x"}, auth=False)

    @pytest.mark.asyncio
    async def test_error_status_raises(self, storage, make_token):
        token = make_token()
        storage.set_auth_data(token, "refresh-1", USER)

        async def handler(request):
            return httpx.Response(404, json={"detail": "Employee with ID x not found"})

        async with make_client(storage, handler) as http:
            with pytest.raises(ApiError) as exc_info:
                await http.get("/employees/x")

        assert exc_info.value.error_type == NOT_FOUND

    @pytest.mark.asyncio
    async def test_network_failure(self, storage):
        async def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(storage, handler) as http:
            with pytest.raises(ApiError) as exc_info:
                await http.get("/employees", auth=False)

        assert exc_info.value.error_type == NETWORK_ERROR


class TestTokenRefresh:
    @pytest.mark.asyncio
    async def test_expired_token_is_refreshed_and_request_replayed(self, storage, make_token):
        new_token = make_token(jti="new")
        storage.set_auth_data(make_token(expires_in=-60), "refresh-1", USER)
        api = FakeApi(valid_token=None, new_token=new_token)

        async with make_client(storage, api) as http:
            response = await http.get("/employees")

        assert response.status_code == 200
        # The expired token is never sent
        assert "Authorization" not in api.requests[0].headers
        assert api.refresh_calls == 1
        assert storage.get_token() == new_token
        assert storage.get_refresh_token() == "refresh-1-next"

    @pytest.mark.asyncio
    async def test_concurrent_requests_share_one_refresh(self, storage, make_token):
        new_token = make_token(jti="new")
        storage.set_auth_data(make_token(expires_in=-60), "refresh-1", USER)
        api = FakeApi(valid_token=None, new_token=new_token)

        async with make_client(storage, api) as http:
            responses = await asyncio.gather(
                http.get("/employees"), http.get("/payrolls"), http.get("/vacations")
            )

        assert [r.json()["path"] for r in responses] == ["/api/employees", "/api/payrolls", "/api/vacations"]
        assert api.refresh_calls == 1
        replays = [r for r in api.requests if r.headers.get("Authorization") == f"Bearer {new_token}"]
        assert len(replays) == 3

    @pytest.mark.asyncio
    async def test_failed_refresh_fails_every_caller(self, storage, make_token):
        storage.set_auth_data(make_token(expires_in=-60), "refresh-1", USER)
        api = FakeApi(valid_token=None, refresh_status=401)

        async with make_client(storage, api) as http:
            results = await asyncio.gather(
                http.get("/employees"), http.get("/payrolls"), return_exceptions=True
            )

        assert all(isinstance(r, TokenRefreshError) for r in results)
        assert api.refresh_calls == 1
        assert storage.get_auth_data() == {"token": None, "refresh_token": None, "user": None}

    @pytest.mark.asyncio
    async def test_next_expiry_starts_a_new_refresh(self, storage, make_token):
        storage.set_auth_data(make_token(expires_in=-60), "refresh-1", USER)
        api = FakeApi(valid_token=None, new_token=make_token(jti="new"))

        async with make_client(storage, api) as http:
            await http.get("/employees")
            storage.set_token(make_token(expires_in=-60))
            await http.get("/employees")

        assert api.refresh_calls == 2
        assert storage.get_refresh_token() == "refresh-1-next-next"

    @pytest.mark.asyncio
    async def test_missing_refresh_token_clears_session(self, storage, make_token):
        storage.set_token(make_token(expires_in=-60))
        api = FakeApi(valid_token=None)

        async with make_client(storage, api) as http:
            with pytest.raises(ApiError) as exc_info:
                await http.get("/employees")

        assert exc_info.value.status == 401
        assert exc_info.value.error_type == SERVER_ERROR
        assert api.refresh_calls == 0
        assert storage.get_token() is None

    @pytest.mark.asyncio
    async def test_valid_token_rejected_by_server_is_not_refreshed(self, storage, make_token):
        storage.set_auth_data(make_token(), "refresh-1", USER)
        api = FakeApi(valid_token="someone-else")

        async with make_client(storage, api) as http:
            with pytest.raises(ApiError) as exc_info:
                await http.get("/employees")

        assert exc_info.value.status == 401
        assert api.refresh_calls == 0
        assert storage.get_refresh_token() == "refresh-1"

    @pytest.mark.asyncio
    async def test_token_refreshed_elsewhere_is_reused(self, storage, make_token):
        stale = make_token()
        fresh = make_token(jti="fresh")
        storage.set_auth_data(stale, "refresh-1", USER)
        api = FakeApi(valid_token=fresh)

        async def handler(request):
            # Another caller stores a new token while this request is in flight.
            if request.headers.get("Authorization") == f"Bearer {stale}":
                storage.set_token(fresh)
            return await api(request)

        async with make_client(storage, handler) as http:
            response = await http.get("/employees")

        assert response.status_code == 200
        assert api.refresh_calls == 0
        assert api.requests[-1].headers["Authorization"] == f"Bearer {fresh}"

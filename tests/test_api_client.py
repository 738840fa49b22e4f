"""
Tests for the REST client: auth header, envelope unwrapping and error mapping.
"""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from app.application.exceptions import OnboardingApiError, SessionExpiredError, UnauthorizedError
from app.infrastructure.http.api_client import ApiClient
from app.infrastructure.http.onboarding_api import HttpOnboardingApi
from app.infrastructure.store.memory_store import MemoryKeyValueStore

BASE_URL = "http://api.test/api/v1"


def _client(handler, storage: MemoryKeyValueStore | None = None) -> ApiClient:
    return ApiClient(
        local_storage=storage or MemoryKeyValueStore(),
        base_url=BASE_URL,
        transport=httpx.MockTransport(handler),
    )


def test_bearer_token_and_envelope_unwrap():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            201,
            json={"success": True, "statusCode": 201, "data": {"sessionId": "S1", "currentStep": "welcome"}},
        )

    storage = MemoryKeyValueStore({"accessToken": "tok"})
    api = HttpOnboardingApi(_client(handler, storage))

    data = asyncio.run(api.start())

    assert data == {"sessionId": "S1", "currentStep": "welcome"}
    assert seen[0].method == "POST"
    assert seen[0].url.path == "/api/v1/onboarding/start"
    assert seen[0].headers["Authorization"] == "Bearer tok"


def test_no_token_no_auth_header():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"data": {}})

    asyncio.run(_client(handler).get("/onboarding/status/S1"))

    assert "Authorization" not in seen[0].headers


def test_save_merges_session_id_into_body():
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"data": {"currentStep": "theme_selection"}})

    api = HttpOnboardingApi(_client(handler))
    asyncio.run(api.save_menu_setup("S1", {"categories": [], "sampleItems": True}))

    assert bodies == [{"sessionId": "S1", "categories": [], "sampleItems": True}]


def test_error_message_and_status_are_surfaced():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"success": False, "statusCode": 400, "message": "Bad things"})

    with pytest.raises(OnboardingApiError) as exc_info:
        asyncio.run(_client(handler).post("/onboarding/complete", {"sessionId": "S1"}))

    assert exc_info.value.message == "Bad things"
    assert exc_info.value.status == 400


def test_error_without_body_uses_default_message():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="upstream gone")

    with pytest.raises(OnboardingApiError) as exc_info:
        asyncio.run(_client(handler).get("/onboarding/status/S1"))

    assert exc_info.value.message == "Something went wrong"
    assert exc_info.value.status == 502


def test_unauthorized_clears_credentials():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"message": "Token has expired"})

    storage = MemoryKeyValueStore({"accessToken": "tok", "user": "{}", "onboarding_session": "S1"})

    with pytest.raises(UnauthorizedError):
        asyncio.run(_client(handler, storage).post("/onboarding/start"))

    assert storage.get("accessToken") is None
    assert storage.get("user") is None
    assert storage.get("onboarding_session") == "S1"


def test_status_404_is_session_expired():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"message": "Onboarding session not found"})

    with pytest.raises(SessionExpiredError) as exc_info:
        asyncio.run(HttpOnboardingApi(_client(handler)).get_status("S1"))

    assert exc_info.value.status == 404


def test_timeout_is_an_api_error_without_status():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(OnboardingApiError) as exc_info:
        asyncio.run(_client(handler).post("/onboarding/start"))

    assert exc_info.value.status is None
    assert exc_info.value.message == "Request timed out"


def test_network_error_is_an_api_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(OnboardingApiError) as exc_info:
        asyncio.run(_client(handler).post("/onboarding/start"))

    assert exc_info.value.message == "Something went wrong"
    assert not isinstance(exc_info.value, UnauthorizedError)


def test_non_object_status_is_an_api_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"success": True, "data": "gone"})

    with pytest.raises(OnboardingApiError) as exc_info:
        asyncio.run(HttpOnboardingApi(_client(handler)).get_status("S1"))

    assert exc_info.value.message == "Invalid onboarding status response"
    assert not isinstance(exc_info.value, SessionExpiredError)


def test_empty_data_is_an_empty_document():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(204)

    assert asyncio.run(HttpOnboardingApi(_client(handler)).save_theme("S1", {"theme": "dark"})) == {}

from __future__ import annotations

import asyncio
from typing import Any

import pytest
from fastapi.testclient import TestClient

from app.application.ports.onboarding_api import OnboardingApiPort
from app.application.use_cases.onboarding_controller import OnboardingController
from app.application.use_cases.onboarding_service import OnboardingService
from app.infrastructure.store.memory_store import MemoryKeyValueStore, MemoryOnboardingSessionStore
from app.main import app
from app.wiring.dependencies import get_onboarding_service


class FakeOnboardingApi(OnboardingApiPort):
    """Scriptable stand-in for the onboarding REST surface."""

    def __init__(self, session_id: str = "S1") -> None:
        self.session_id = session_id
        self.calls: list[tuple[str, Any]] = []
        self.failures: dict[str, Exception] = {}
        self.status_payload: dict[str, Any] = {}
        self.gate: asyncio.Event | None = None

    def fail(self, method: str, exc: Exception) -> None:
        self.failures[method] = exc

    async def _call(self, name: str, payload: Any = None) -> None:
        self.calls.append((name, payload))
        if self.gate is not None:
            await self.gate.wait()
        exc = self.failures.pop(name, None)
        if exc is not None:
            raise exc

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    async def start(self) -> dict[str, Any]:
        await self._call("start")
        return {"sessionId": self.session_id, "currentStep": "welcome", "completedSteps": []}

    async def get_status(self, session_id: str) -> dict[str, Any]:
        await self._call("get_status", session_id)
        return dict(self.status_payload)

    async def save_restaurant_info(self, session_id, restaurant_info):
        await self._call("save_restaurant_info", {"sessionId": session_id, **restaurant_info})
        return {}

    async def save_menu_setup(self, session_id, menu_setup):
        await self._call("save_menu_setup", {"sessionId": session_id, **menu_setup})
        return {}

    async def save_theme(self, session_id, theme_settings):
        await self._call("save_theme", {"sessionId": session_id, **theme_settings})
        return {}

    async def complete(self, session_id):
        await self._call("complete", {"sessionId": session_id})
        return {"sessionId": session_id, "isCompleted": True}


@pytest.fixture
def local_storage() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def fake_api() -> FakeOnboardingApi:
    return FakeOnboardingApi()


@pytest.fixture
def controller(fake_api, local_storage) -> OnboardingController:
    return OnboardingController(api=fake_api, local_storage=local_storage, pointer_key="onboarding_session")


class Clock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> Clock:
    return Clock()


@pytest.fixture
def onboarding_service(clock) -> OnboardingService:
    return OnboardingService(store=MemoryOnboardingSessionStore(), ttl_hours=24, clock=clock)


@pytest.fixture
def api_app(onboarding_service):
    app.dependency_overrides[get_onboarding_service] = lambda: onboarding_service
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(api_app) -> TestClient:
    return TestClient(api_app)

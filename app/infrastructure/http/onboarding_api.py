from __future__ import annotations

from typing import Any

from app.application.exceptions import OnboardingApiError, SessionExpiredError
from app.application.ports.onboarding_api import OnboardingApiPort
from app.infrastructure.http.api_client import ApiClient

_EXPIRED_STATUSES = {404, 410}


def _document(data: Any, what: str) -> dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise OnboardingApiError(f"Invalid onboarding {what} response")
    return data


class HttpOnboardingApi(OnboardingApiPort):
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def start(self) -> dict[str, Any]:
        return _document(await self._client.post("/onboarding/start"), "start")

    async def get_status(self, session_id: str) -> dict[str, Any]:
        try:
            data = await self._client.get(f"/onboarding/status/{session_id}")
        except OnboardingApiError as e:
            if e.status in _EXPIRED_STATUSES:
                raise SessionExpiredError(e.message, e.status) from e
            raise
        return _document(data, "status")

    async def save_restaurant_info(self, session_id: str | None, restaurant_info: dict[str, Any]) -> dict[str, Any]:
        data = await self._client.post("/onboarding/restaurant-info", {"sessionId": session_id, **restaurant_info})
        return _document(data, "restaurant info")

    async def save_menu_setup(self, session_id: str | None, menu_setup: dict[str, Any]) -> dict[str, Any]:
        data = await self._client.post("/onboarding/menu-setup", {"sessionId": session_id, **menu_setup})
        return _document(data, "menu setup")

    async def save_theme(self, session_id: str | None, theme_settings: dict[str, Any]) -> dict[str, Any]:
        data = await self._client.post("/onboarding/theme", {"sessionId": session_id, **theme_settings})
        return _document(data, "theme")

    async def complete(self, session_id: str | None) -> dict[str, Any]:
        return _document(await self._client.post("/onboarding/complete", {"sessionId": session_id}), "complete")

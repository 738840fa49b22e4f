from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class OnboardingApiPort(ABC):
    """
    Client view of the onboarding REST surface.

    Every method returns the unwrapped ``data`` payload of the response and
    raises OnboardingApiError (or a subclass) on failure.
    """

    @abstractmethod
    async def start(self) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    async def get_status(self, session_id: str) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    async def save_restaurant_info(self, session_id: str | None, restaurant_info: dict[str, Any]) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    async def save_menu_setup(self, session_id: str | None, menu_setup: dict[str, Any]) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    async def save_theme(self, session_id: str | None, theme_settings: dict[str, Any]) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    async def complete(self, session_id: str | None) -> dict[str, Any]:
        raise NotImplementedError

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

from app.domain.entities.onboarding_step import OnboardingStep

# Sub-documents keep the wire (camelCase) keys so merges and request payloads are the same dicts.
DEFAULT_RESTAURANT_INFO: dict[str, Any] = {
    "restaurantName": "",
    "ownerName": "",
    "email": "",
    "phone": "",
    "address": {
        "street": "",
        "city": "",
        "state": "",
        "zipCode": "",
        "country": "",
    },
    "cuisineType": [],
    "description": "",
}

DEFAULT_MENU_SETUP: dict[str, Any] = {
    "categories": [],
    "sampleItems": False,
}

DEFAULT_THEME_SETTINGS: dict[str, Any] = {
    "theme": "modern",
    "primaryColor": "#0ea5e9",
    "secondaryColor": "#22c55e",
    "fontFamily": "Inter",
    "logo": None,
}


def _defaults(doc: dict[str, Any]):
    return lambda: copy.deepcopy(doc)


@dataclass(frozen=True)
class ErrorInfo:
    message: str
    status: int | None = None


@dataclass(frozen=True)
class OnboardingData:
    restaurant_info: dict[str, Any] = field(default_factory=_defaults(DEFAULT_RESTAURANT_INFO))
    menu_setup: dict[str, Any] = field(default_factory=_defaults(DEFAULT_MENU_SETUP))
    theme_settings: dict[str, Any] = field(default_factory=_defaults(DEFAULT_THEME_SETTINGS))


@dataclass(frozen=True)
class OnboardingState:
    session_id: str | None = None
    current_step: OnboardingStep = OnboardingStep.welcome
    completed_steps: tuple[OnboardingStep, ...] = ()
    is_loading: bool = False
    error: ErrorInfo | None = None
    data: OnboardingData = field(default_factory=OnboardingData)

    @property
    def current_step_index(self) -> int:
        return self.current_step.position

    def is_completed(self, step: OnboardingStep) -> bool:
        return step in self.completed_steps

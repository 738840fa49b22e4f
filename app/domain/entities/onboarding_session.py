from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from app.domain.entities.onboarding_step import OnboardingStep


@dataclass(frozen=True)
class OnboardingSession:
    """Server-side record of a tenant's progress through the setup wizard."""

    session_id: str
    current_step: OnboardingStep = OnboardingStep.welcome
    completed_steps: tuple[OnboardingStep, ...] = ()
    is_completed: bool = False
    restaurant_info: dict[str, Any] | None = None
    menu_setup: dict[str, Any] | None = None
    theme_settings: dict[str, Any] | None = None
    created_at: float | None = None
    updated_at: float | None = None
    expires_at: float | None = None  # epoch seconds; None never expires

    def is_expired(self, now_ts: float) -> bool:
        return self.expires_at is not None and now_ts >= self.expires_at

    def to_payload(self) -> dict[str, Any]:
        return {
            "sessionId": self.session_id,
            "currentStep": self.current_step.value,
            "completedSteps": [s.value for s in self.completed_steps],
            "isCompleted": self.is_completed,
            "restaurantInfo": self.restaurant_info,
            "menuSetup": self.menu_setup,
            "themeSettings": self.theme_settings,
        }

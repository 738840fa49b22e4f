from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from app.domain.entities.onboarding_state import ErrorInfo
from app.domain.entities.onboarding_step import OnboardingStep


@dataclass(frozen=True)
class SetLoading:
    value: bool


@dataclass(frozen=True)
class SetError:
    error: ErrorInfo | None


@dataclass(frozen=True)
class SetSession:
    session_id: str | None
    current_step: OnboardingStep
    completed_steps: tuple[OnboardingStep, ...] = ()


@dataclass(frozen=True)
class UpdateRestaurantInfo:
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class UpdateMenuSetup:
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class UpdateTheme:
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class NextStep:
    pass


@dataclass(frozen=True)
class PrevStep:
    pass


@dataclass(frozen=True)
class GoToStep:
    step: OnboardingStep


@dataclass(frozen=True)
class Reset:
    pass


OnboardingAction = Union[
    SetLoading,
    SetError,
    SetSession,
    UpdateRestaurantInfo,
    UpdateMenuSetup,
    UpdateTheme,
    NextStep,
    PrevStep,
    GoToStep,
    Reset,
]

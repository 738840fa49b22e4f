from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OnboardingStep(str, Enum):
    welcome = "welcome"
    restaurant_info = "restaurant_info"
    menu_setup = "menu_setup"
    theme_selection = "theme_selection"
    completion = "completion"

    @property
    def position(self) -> int:
        return STEP_ORDER.index(self)

    @staticmethod
    def at(index: int) -> "OnboardingStep":
        """Step at ``index``, clamped to the first/last step."""
        return STEP_ORDER[max(0, min(index, len(STEP_ORDER) - 1))]


@dataclass(frozen=True)
class StepInfo:
    id: OnboardingStep
    label: str
    number: int


STEP_ORDER: tuple[OnboardingStep, ...] = tuple(OnboardingStep)

STEPS: tuple[StepInfo, ...] = (
    StepInfo(OnboardingStep.welcome, "Welcome", 1),
    StepInfo(OnboardingStep.restaurant_info, "Restaurant Info", 2),
    StepInfo(OnboardingStep.menu_setup, "Menu Setup", 3),
    StepInfo(OnboardingStep.theme_selection, "Theme", 4),
    StepInfo(OnboardingStep.completion, "Complete", 5),
)

LAST_STEP_INDEX = len(STEP_ORDER) - 1

# Steps that must be done before a session can be completed.
REQUIRED_STEPS: tuple[OnboardingStep, ...] = STEP_ORDER[:-1]


def parse_step(value: str | OnboardingStep | None) -> OnboardingStep | None:
    if isinstance(value, OnboardingStep):
        return value
    try:
        return OnboardingStep(str(value or "").strip().lower())
    except ValueError:
        return None

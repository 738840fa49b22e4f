from __future__ import annotations

from dataclasses import replace
from typing import Any

from app.domain.entities.onboarding_action import (
    GoToStep,
    NextStep,
    OnboardingAction,
    PrevStep,
    Reset,
    SetError,
    SetLoading,
    SetSession,
    UpdateMenuSetup,
    UpdateRestaurantInfo,
    UpdateTheme,
)
from app.domain.entities.onboarding_state import OnboardingState
from app.domain.entities.onboarding_step import OnboardingStep


def reduce(state: OnboardingState, action: OnboardingAction) -> OnboardingState:
    """
    Single transition function for the onboarding wizard.

    Pure: returns a new state (or ``state`` itself when the action is a no-op)
    and never touches the network or local storage.
    """
    if isinstance(action, SetLoading):
        return replace(state, is_loading=action.value)

    if isinstance(action, SetError):
        return replace(state, error=action.error, is_loading=False)

    if isinstance(action, SetSession):
        return replace(
            state,
            session_id=action.session_id,
            current_step=action.current_step,
            completed_steps=_dedupe(action.completed_steps),
            is_loading=False,
        )

    if isinstance(action, UpdateRestaurantInfo):
        data = replace(state.data, restaurant_info=_merge(state.data.restaurant_info, action.payload))
        return replace(state, data=data)

    if isinstance(action, UpdateMenuSetup):
        data = replace(state.data, menu_setup=_merge(state.data.menu_setup, action.payload))
        return replace(state, data=data)

    if isinstance(action, UpdateTheme):
        data = replace(state.data, theme_settings=_merge(state.data.theme_settings, action.payload))
        return replace(state, data=data)

    if isinstance(action, NextStep):
        return replace(
            state,
            current_step=OnboardingStep.at(state.current_step_index + 1),
            completed_steps=_dedupe(state.completed_steps + (state.current_step,)),
        )

    if isinstance(action, PrevStep):
        return replace(state, current_step=OnboardingStep.at(state.current_step_index - 1))

    if isinstance(action, GoToStep):
        if action.step in state.completed_steps:
            return replace(state, current_step=action.step)
        return state

    if isinstance(action, Reset):
        return OnboardingState()

    raise TypeError(f"Unknown onboarding action: {type(action).__name__}")


def _merge(current: dict[str, Any], partial: dict[str, Any] | None) -> dict[str, Any]:
    merged = dict(current)
    merged.update(partial or {})
    return merged


def _dedupe(steps: tuple[OnboardingStep, ...]) -> tuple[OnboardingStep, ...]:
    return tuple(dict.fromkeys(steps))

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from app.application.exceptions import OnboardingApiError, OnboardingBusyError
from app.application.ports.key_value_store import KeyValueStorePort
from app.application.ports.onboarding_api import OnboardingApiPort
from app.application.utils.onboarding_reducer import reduce
from app.core.config import settings
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
from app.domain.entities.onboarding_state import ErrorInfo, OnboardingState
from app.domain.entities.onboarding_step import STEPS, OnboardingStep, StepInfo, parse_step


class OnboardingController:
    """
    Client-side owner of onboarding progress.

    All state changes go through ``reduce``. Network-calling operations are
    single-flight: starting one while another is pending raises
    OnboardingBusyError and leaves the state alone. ``reset_onboarding``
    starts a new generation; a request that was pending across a reset
    finishes without touching state or the durable session pointer, which
    lives in ``local_storage`` under ``pointer_key``.
    """

    def __init__(
        self,
        api: OnboardingApiPort,
        local_storage: KeyValueStorePort,
        pointer_key: str | None = None,
    ) -> None:
        self._api = api
        self._local_storage = local_storage
        self._pointer_key = pointer_key or settings.SESSION_POINTER_KEY
        self._state = OnboardingState()
        self._in_flight = False
        self._generation = 0
        self._logger = logging.getLogger(__name__)

    @property
    def state(self) -> OnboardingState:
        return self._state

    @property
    def steps(self) -> tuple[StepInfo, ...]:
        return STEPS

    def stored_session_id(self) -> str | None:
        return self._local_storage.get(self._pointer_key)

    async def start_onboarding(self) -> dict[str, Any]:
        async def call(generation: int) -> dict[str, Any]:
            payload = await self._api.start()
            if self._is_stale(generation, "start_onboarding"):
                return payload
            session_id = payload.get("sessionId")
            if not session_id:
                raise OnboardingApiError("Onboarding start response did not include a sessionId")
            self._dispatch(_session_from_payload(str(session_id), payload))
            self._local_storage.set(self._pointer_key, str(session_id))
            self._logger.info("Onboarding session started", extra={"session_id": session_id})
            return payload

        return await self._run("start_onboarding", call)

    async def resume_session(self, session_id: str) -> dict[str, Any]:
        async def call(generation: int) -> dict[str, Any]:
            try:
                payload = await self._api.get_status(session_id)
                if not isinstance(payload, dict):
                    raise OnboardingApiError("Invalid onboarding status response")
            except OnboardingApiError:
                if not self._is_stale(generation, "resume_session"):
                    self._local_storage.delete(self._pointer_key)
                    self._logger.info("Dropped stale onboarding session pointer", extra={"session_id": session_id})
                raise

            if self._is_stale(generation, "resume_session"):
                return payload
            self._dispatch(_session_from_payload(str(payload.get("sessionId") or session_id), payload))
            if isinstance(payload.get("restaurantInfo"), dict):
                self._dispatch(UpdateRestaurantInfo(payload["restaurantInfo"]))
            if isinstance(payload.get("menuSetup"), dict):
                self._dispatch(UpdateMenuSetup(payload["menuSetup"]))
            if isinstance(payload.get("themeSettings"), dict):
                self._dispatch(UpdateTheme(payload["themeSettings"]))
            self._logger.info(
                "Onboarding session resumed",
                extra={"session_id": session_id, "step": self._state.current_step.value},
            )
            return payload

        return await self._run("resume_session", call)

    async def auto_resume(self) -> dict[str, Any] | None:
        """Resume the stored session if there is one; a failed resume is treated as no session."""
        session_id = self.stored_session_id()
        if not session_id:
            return None
        try:
            return await self.resume_session(session_id)
        except OnboardingApiError as e:
            self._logger.info(
                "Stored onboarding session could not be resumed",
                extra={"session_id": session_id, "status": e.status, "error": e.message},
            )
            return None

    def update_restaurant_info(self, partial: dict[str, Any]) -> OnboardingState:
        return self._dispatch(UpdateRestaurantInfo(dict(partial)))

    def update_menu_setup(self, partial: dict[str, Any]) -> OnboardingState:
        return self._dispatch(UpdateMenuSetup(dict(partial)))

    def update_theme(self, partial: dict[str, Any]) -> OnboardingState:
        return self._dispatch(UpdateTheme(dict(partial)))

    async def next_step(self) -> OnboardingState:
        async def call(generation: int) -> OnboardingState:
            state = self._state
            step = state.current_step
            if step == OnboardingStep.restaurant_info:
                await self._api.save_restaurant_info(state.session_id, state.data.restaurant_info)
            elif step == OnboardingStep.menu_setup:
                await self._api.save_menu_setup(state.session_id, state.data.menu_setup)
            elif step == OnboardingStep.theme_selection:
                await self._api.save_theme(state.session_id, state.data.theme_settings)

            if self._is_stale(generation, "next_step"):
                return self._state
            self._dispatch(NextStep())
            self._logger.info(
                "Onboarding step completed",
                extra={"session_id": state.session_id, "step": step.value},
            )
            return self._state

        return await self._run("next_step", call)

    def prev_step(self) -> OnboardingState:
        return self._dispatch(PrevStep())

    def go_to_step(self, step: str | OnboardingStep) -> OnboardingState:
        target = parse_step(step)
        if target is None:
            return self._state
        return self._dispatch(GoToStep(target))

    async def complete_onboarding(self) -> dict[str, Any]:
        async def call(generation: int) -> dict[str, Any]:
            session_id = self._state.session_id
            payload = await self._api.complete(session_id)
            if self._is_stale(generation, "complete_onboarding"):
                return payload
            self._local_storage.delete(self._pointer_key)
            self._logger.info("Onboarding completed", extra={"session_id": session_id})
            return payload

        return await self._run("complete_onboarding", call)

    def reset_onboarding(self) -> OnboardingState:
        self._generation += 1
        self._local_storage.delete(self._pointer_key)
        return self._dispatch(Reset())

    def _dispatch(self, action: OnboardingAction) -> OnboardingState:
        self._state = reduce(self._state, action)
        return self._state

    def _is_stale(self, generation: int, operation: str) -> bool:
        if generation == self._generation:
            return False
        self._logger.info("Discarded %s response received after reset", operation)
        return True

    async def _run(self, operation: str, call: Callable[[int], Awaitable[Any]]) -> Any:
        if self._in_flight:
            raise OnboardingBusyError(f"{operation} called while another onboarding request is in flight")

        generation = self._generation
        self._in_flight = True
        self._dispatch(SetError(None))
        self._dispatch(SetLoading(True))
        try:
            return await call(generation)
        except OnboardingApiError as e:
            if generation == self._generation:
                self._dispatch(SetError(ErrorInfo(message=e.message, status=e.status)))
            self._logger.warning(
                "Onboarding request failed",
                extra={
                    "session_id": self._state.session_id,
                    "step": self._state.current_step.value,
                    "status": e.status,
                    "error": e.message,
                },
            )
            raise
        finally:
            self._in_flight = False
            if self._state.is_loading:
                self._dispatch(SetLoading(False))


def _session_from_payload(session_id: str, payload: dict[str, Any]) -> SetSession:
    current = parse_step(payload.get("currentStep")) or OnboardingStep.welcome
    completed = tuple(
        step for step in (parse_step(s) for s in payload.get("completedSteps") or []) if step is not None
    )
    return SetSession(session_id=session_id, current_step=current, completed_steps=completed)

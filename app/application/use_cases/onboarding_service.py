from __future__ import annotations

import logging
import secrets
import string
import time
from dataclasses import dataclass, field, replace
from typing import Any, Callable

from app.application.exceptions import SessionNotFoundError, StepsIncompleteError
from app.application.ports.onboarding_session_store import OnboardingSessionStorePort
from app.domain.entities.onboarding_session import OnboardingSession
from app.domain.entities.onboarding_step import REQUIRED_STEPS, OnboardingStep

_ID_ALPHABET = string.ascii_letters + string.digits

logger = logging.getLogger(__name__)


def generate_session_id(length: int) -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(max(1, length)))


@dataclass
class OnboardingService:
    """Server side of the onboarding surface: owns session records and their step bookkeeping."""

    store: OnboardingSessionStorePort
    ttl_hours: int = 24
    session_id_length: int = 16
    clock: Callable[[], float] = field(default=time.time)

    def start(self) -> OnboardingSession:
        now = self.clock()
        session = OnboardingSession(
            session_id=generate_session_id(self.session_id_length),
            current_step=OnboardingStep.welcome,
            completed_steps=(OnboardingStep.welcome,),
            created_at=now,
            updated_at=now,
            expires_at=now + self.ttl_hours * 3600 if self.ttl_hours > 0 else None,
        )
        self.store.put(session)
        logger.info("Onboarding session created", extra={"session_id": session.session_id})
        return session

    def get_status(self, session_id: str) -> OnboardingSession:
        return self._load(session_id)

    def save_restaurant_info(self, session_id: str, restaurant_info: dict[str, Any]) -> OnboardingSession:
        return self._save_step(session_id, OnboardingStep.restaurant_info, restaurant_info=dict(restaurant_info))

    def save_menu_setup(self, session_id: str, menu_setup: dict[str, Any]) -> OnboardingSession:
        return self._save_step(session_id, OnboardingStep.menu_setup, menu_setup=dict(menu_setup))

    def save_theme(self, session_id: str, theme_settings: dict[str, Any]) -> OnboardingSession:
        return self._save_step(session_id, OnboardingStep.theme_selection, theme_settings=dict(theme_settings))

    def complete(self, session_id: str) -> OnboardingSession:
        session = self._load(session_id)

        missing = [s.value for s in REQUIRED_STEPS if s not in session.completed_steps]
        if missing:
            raise StepsIncompleteError(missing)

        completed = session.completed_steps
        if OnboardingStep.completion not in completed:
            completed = completed + (OnboardingStep.completion,)
        session = replace(session, completed_steps=completed, is_completed=True, updated_at=self.clock())
        self.store.put(session)
        logger.info("Onboarding session completed", extra={"session_id": session_id})
        return session

    def _save_step(self, session_id: str, step: OnboardingStep, **changes: Any) -> OnboardingSession:
        session = self._load(session_id)
        completed = session.completed_steps
        if step not in completed:
            completed = completed + (step,)
        session = replace(
            session,
            current_step=OnboardingStep.at(step.position + 1),
            completed_steps=completed,
            updated_at=self.clock(),
            **changes,
        )
        self.store.put(session)
        logger.info("Onboarding step saved", extra={"session_id": session_id, "step": step.value})
        return session

    def _load(self, session_id: str) -> OnboardingSession:
        session = self.store.get(session_id) if session_id else None
        if session is None:
            raise SessionNotFoundError("Onboarding session not found")
        if session.is_expired(self.clock()):
            self.store.delete(session_id)
            logger.info("Onboarding session expired", extra={"session_id": session_id})
            raise SessionNotFoundError("Onboarding session not found")
        return session

from __future__ import annotations

import threading

from app.application.ports.key_value_store import KeyValueStorePort
from app.application.ports.onboarding_session_store import OnboardingSessionStorePort
from app.domain.entities.onboarding_session import OnboardingSession


class MemoryKeyValueStore(KeyValueStorePort):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)


class MemoryOnboardingSessionStore(OnboardingSessionStorePort):
    def __init__(self) -> None:
        self._sessions: dict[str, OnboardingSession] = {}
        self._lock = threading.Lock()

    def get(self, session_id: str) -> OnboardingSession | None:
        with self._lock:
            return self._sessions.get(session_id)

    def put(self, session: OnboardingSession) -> None:
        with self._lock:
            self._sessions[session.session_id] = session

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

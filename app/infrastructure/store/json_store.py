from __future__ import annotations

import json
import logging
import re
import threading
from pathlib import Path
from typing import Any

from app.application.ports.key_value_store import KeyValueStorePort
from app.application.ports.onboarding_session_store import OnboardingSessionStorePort
from app.domain.entities.onboarding_session import OnboardingSession
from app.domain.entities.onboarding_step import OnboardingStep, parse_step

logger = logging.getLogger(__name__)

_SAFE_ID = re.compile(r"^[A-Za-z0-9_-]+$")


def _write_json_atomic(file_path: Path, data: Any) -> None:
    """Write JSON to a temp file and rename it over ``file_path``."""
    temp_path = file_path.with_suffix(file_path.suffix + ".tmp")
    try:
        with open(temp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        temp_path.replace(file_path)
    except Exception:
        if temp_path.exists():
            temp_path.unlink(missing_ok=True)
        raise


def _read_json(file_path: Path) -> Any:
    """Read JSON from ``file_path``; missing or corrupted files read as None."""
    if not file_path.exists():
        return None
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable store file", extra={"error": f"{file_path}: {e}"})
        return None


class JsonKeyValueStore(KeyValueStorePort):
    """Local storage persisted as a single JSON object on disk."""

    def __init__(self, path: str = "./data/local_storage.json") -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _load(self) -> dict[str, str]:
        data = _read_json(self._path)
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items() if v is not None}

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            _write_json_atomic(self._path, data)

    def delete(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if key not in data:
                return
            del data[key]
            _write_json_atomic(self._path, data)


class JsonOnboardingSessionStore(OnboardingSessionStorePort):
    """One JSON file per onboarding session under ``data_dir``."""

    def __init__(self, data_dir: str = "./data/onboarding") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()

    def _get_lock(self, session_id: str) -> threading.Lock:
        with self._lock_lock:
            if session_id not in self._locks:
                self._locks[session_id] = threading.Lock()
            return self._locks[session_id]

    def _get_file_path(self, session_id: str) -> Path | None:
        # Session ids come from request paths; refuse anything that is not a plain token.
        if not _SAFE_ID.match(session_id or ""):
            return None
        return self._data_dir / f"{session_id}.json"

    def get(self, session_id: str) -> OnboardingSession | None:
        file_path = self._get_file_path(session_id)
        if file_path is None or not file_path.exists():
            return None
        with self._get_lock(session_id):
            data = _read_json(file_path)
        if not isinstance(data, dict):
            return None
        return self._deserialize(data)

    def put(self, session: OnboardingSession) -> None:
        file_path = self._get_file_path(session.session_id)
        if file_path is None:
            raise ValueError(f"Invalid session id: {session.session_id!r}")
        with self._get_lock(session.session_id):
            _write_json_atomic(file_path, self._serialize(session))

    def delete(self, session_id: str) -> None:
        file_path = self._get_file_path(session_id)
        if file_path is None:
            return
        with self._get_lock(session_id):
            file_path.unlink(missing_ok=True)
        with self._lock_lock:
            self._locks.pop(session_id, None)

    def _serialize(self, session: OnboardingSession) -> dict[str, Any]:
        return {
            "session_id": session.session_id,
            "current_step": session.current_step.value,
            "completed_steps": [s.value for s in session.completed_steps],
            "is_completed": session.is_completed,
            "restaurant_info": session.restaurant_info,
            "menu_setup": session.menu_setup,
            "theme_settings": session.theme_settings,
            "created_at": session.created_at,
            "updated_at": session.updated_at,
            "expires_at": session.expires_at,
            "version": 1,
        }

    def _deserialize(self, data: dict[str, Any]) -> OnboardingSession:
        completed = tuple(
            step for step in (parse_step(s) for s in data.get("completed_steps") or []) if step is not None
        )
        return OnboardingSession(
            session_id=str(data.get("session_id", "")),
            current_step=parse_step(data.get("current_step")) or OnboardingStep.welcome,
            completed_steps=completed,
            is_completed=bool(data.get("is_completed", False)),
            restaurant_info=data.get("restaurant_info"),
            menu_setup=data.get("menu_setup"),
            theme_settings=data.get("theme_settings"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            expires_at=data.get("expires_at"),
        )

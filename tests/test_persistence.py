"""
Tests for the durable JSON stores.
"""

from __future__ import annotations

import json
import tempfile
from pathlib import Path

from app.domain.entities.onboarding_session import OnboardingSession
from app.domain.entities.onboarding_step import OnboardingStep
from app.infrastructure.store.json_store import JsonKeyValueStore, JsonOnboardingSessionStore


def test_key_value_store_survives_reopen():
    """A value written by one store instance is visible to the next."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = str(Path(tmpdir) / "local_storage.json")
        JsonKeyValueStore(path).set("onboarding_session", "S1")

        reopened = JsonKeyValueStore(path)
        assert reopened.get("onboarding_session") == "S1"

        reopened.delete("onboarding_session")
        assert JsonKeyValueStore(path).get("onboarding_session") is None


def test_key_value_store_delete_missing_key():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonKeyValueStore(str(Path(tmpdir) / "ls.json"))
        store.delete("nothing")
        assert store.get("nothing") is None


def test_key_value_store_ignores_corrupted_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "ls.json"
        path.write_text("{not json", encoding="utf-8")

        store = JsonKeyValueStore(str(path))
        assert store.get("accessToken") is None

        store.set("accessToken", "tok")
        assert json.loads(path.read_text(encoding="utf-8")) == {"accessToken": "tok"}


def test_session_store_round_trip():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonOnboardingSessionStore(data_dir=tmpdir)
        session = OnboardingSession(
            session_id="abc123",
            current_step=OnboardingStep.menu_setup,
            completed_steps=(OnboardingStep.welcome, OnboardingStep.restaurant_info),
            restaurant_info={"restaurantName": "Bella", "cuisineType": ["Italian"]},
            created_at=1.0,
            updated_at=2.0,
            expires_at=86401.0,
        )
        store.put(session)

        retrieved = JsonOnboardingSessionStore(data_dir=tmpdir).get("abc123")
        assert retrieved == session


def test_session_store_rejects_path_like_ids():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonOnboardingSessionStore(data_dir=tmpdir)
        assert store.get("../secrets") is None
        store.delete("../secrets")


def test_session_store_delete():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonOnboardingSessionStore(data_dir=tmpdir)
        store.put(OnboardingSession(session_id="gone"))
        store.delete("gone")
        assert store.get("gone") is None


def test_session_store_delete_releases_lock():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonOnboardingSessionStore(data_dir=tmpdir)
        store.put(OnboardingSession(session_id="gone"))
        store.delete("gone")
        assert store.get("missing") is None
        assert store._locks == {}

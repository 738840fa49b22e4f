from functools import lru_cache
import logging

from app.core.config import settings
from app.application.ports.key_value_store import KeyValueStorePort
from app.application.ports.onboarding_session_store import OnboardingSessionStorePort
from app.application.use_cases.onboarding_controller import OnboardingController
from app.application.use_cases.onboarding_service import OnboardingService
from app.infrastructure.http.api_client import ApiClient
from app.infrastructure.http.onboarding_api import HttpOnboardingApi
from app.infrastructure.store.json_store import JsonKeyValueStore, JsonOnboardingSessionStore
from app.infrastructure.store.memory_store import MemoryOnboardingSessionStore


_session_store: OnboardingSessionStorePort | None = None


def _is_local_env() -> bool:
    return settings.ENV.lower() in {"dev", "local"}


def get_session_store() -> OnboardingSessionStorePort:
    global _session_store
    if _session_store is None:
        if _is_local_env():
            _session_store = JsonOnboardingSessionStore(data_dir=settings.ONBOARDING_STORE_DIR)
        else:
            _session_store = MemoryOnboardingSessionStore()
        logging.getLogger(__name__).info("Using %s for onboarding sessions", type(_session_store).__name__)
    return _session_store


def get_onboarding_service() -> OnboardingService:
    return OnboardingService(
        store=get_session_store(),
        ttl_hours=settings.ONBOARDING_SESSION_TTL_HOURS,
        session_id_length=settings.SESSION_ID_LENGTH,
    )


@lru_cache
def get_local_storage() -> KeyValueStorePort:
    return JsonKeyValueStore(path=settings.LOCAL_STORAGE_PATH)


def get_api_client(base_url: str | None = None) -> ApiClient:
    return ApiClient(local_storage=get_local_storage(), base_url=base_url or settings.API_BASE_URL)


def get_onboarding_controller(client: ApiClient) -> OnboardingController:
    return OnboardingController(
        api=HttpOnboardingApi(client),
        local_storage=get_local_storage(),
        pointer_key=settings.SESSION_POINTER_KEY,
    )

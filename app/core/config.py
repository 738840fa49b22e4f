from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    API_BASE_URL: str = "http://localhost:5000/api/v1"
    API_TIMEOUT_SECONDS: float = 10.0

    LOCAL_STORAGE_PATH: str = "./data/local_storage.json"
    SESSION_POINTER_KEY: str = "onboarding_session"
    ACCESS_TOKEN_KEY: str = "accessToken"
    USER_KEY: str = "user"

    ONBOARDING_STORE_DIR: str = "./data/onboarding"
    ONBOARDING_SESSION_TTL_HOURS: int = 24
    SESSION_ID_LENGTH: int = 16


settings = Settings()

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "local"
    APP_NAME: str = "Rideseat API"
    API_PREFIX: str = "/api"
    # Comma-separated origins for CORS (e.g. https://rideseat.app,https://admin.rideseat.app). If empty, uses localhost defaults.
    CORS_ORIGINS: str = ""

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # loguru serialize=True, one JSON object per line

    # Reload the seed data set on every startup (state lives in process memory only)
    SEED_DATA: bool = True

    # When set, a ticket can pass validation only once; otherwise re-scans are reported but accepted
    TICKET_SINGLE_USE: bool = False

    @field_validator("LOG_LEVEL", mode="after")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return (v or "INFO").strip().upper()


settings = Settings()

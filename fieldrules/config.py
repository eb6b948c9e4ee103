from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Field metadata keys
    VALIDATE_TAG: str = "validate"
    NAME_TAG: str = "json"
    READ_NAME_TAG: bool = False  # Report errors under the alternate name when present

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for production (structured JSON), False for dev (colored)

    model_config = SettingsConfigDict(
        env_prefix="FIELDRULES_",
        env_file=".env",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()

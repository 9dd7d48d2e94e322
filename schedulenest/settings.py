from __future__ import annotations

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from schedulenest.constants import (
    DARK_MODE_KEY,
    MAPPING_PREFIX,
    STORAGE_PREFIX,
    SYSTEM_CODE_LENGTH,
)


class Settings(BaseSettings):
    database_url: str = Field("sqlite:///schedulenest.db", alias="SCHEDULENEST_DATABASE_URL")

    storage_prefix: str = Field(STORAGE_PREFIX, alias="SCHEDULENEST_STORAGE_PREFIX")
    mapping_prefix: str = Field(MAPPING_PREFIX, alias="SCHEDULENEST_MAPPING_PREFIX")
    dark_mode_key: str = Field(DARK_MODE_KEY, alias="SCHEDULENEST_DARK_MODE_KEY")

    system_code_length: int = Field(SYSTEM_CODE_LENGTH, alias="SCHEDULENEST_SYSTEM_CODE_LENGTH")
    protect_default_folders: bool = Field(False, alias="SCHEDULENEST_PROTECT_DEFAULT_FOLDERS")

    log_level: str = Field("INFO", alias="SCHEDULENEST_LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    def document_key(self, system_code: str) -> str:
        return f"{self.storage_prefix}{system_code}"

    def mapping_key(self, user_code: str) -> str:
        return f"{self.mapping_prefix}{user_code}"


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


# For local dev convenience only.
if os.getenv("SCHEDULENEST_DEBUG_SETTINGS"):
    print(get_settings())

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .state import TabSelection


class Settings(BaseSettings):
    """Configuration for the navigation core and its developer CLI.

    Values are loaded from environment variables and `.env`.

    Notes:
    - An empty BN_DEEP_LINK_SCHEMES accepts links with any scheme.
    - BN_DEFAULT_TAB must name one of the app's tab roots; anything else
      fails validation when settings are loaded.
    - A relative BN_LOG_DIR is resolved against the working directory.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Deep links
    BN_DEEP_LINK_SCHEMES: list[str] = Field(default_factory=list)

    # Navigation roots
    BN_DEFAULT_TAB: TabSelection = Field(default=TabSelection.COLLECTIONS)
    BN_ROOT_LABEL: str = Field(default="Home")

    # Logging (diagnostic; stored outside the app bundle)
    BN_LOG_DIR: Path = Field(default=Path("_logs"))
    BN_LOG_LEVEL: str = Field(default="INFO")
    # Timed rotation retention count (days).
    BN_LOG_BACKUP_COUNT: int = Field(default=14)

    @field_validator("BN_DEEP_LINK_SCHEMES")
    @classmethod
    def _normalize_schemes(cls, value: list[str]) -> list[str]:
        return [s.strip().lower() for s in value if s and s.strip()]

    @field_validator("BN_DEFAULT_TAB", mode="before")
    @classmethod
    def _normalize_tab(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


def load_settings() -> Settings:
    return Settings()

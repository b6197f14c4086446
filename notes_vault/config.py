from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_VAULT_FILE = "vault-data.json"


class Settings(BaseSettings):
    """Runtime configuration for the vault.

    Defaults reproduce the fixed behavior of the tool: the vault file lives in
    the working directory. Values may be overridden via ``NOTES_VAULT_*``
    environment variables or by CLI flags.
    """

    # Storage
    vault_path: Path = Path(DEFAULT_VAULT_FILE)

    # Logging
    # Note: WARNING keeps the interactive console free of log chatter.
    log_level: str = "WARNING"
    log_format: Literal["plain", "json"] = "plain"

    # pydantic-settings v2 configuration
    model_config = SettingsConfigDict(
        env_prefix="NOTES_VAULT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

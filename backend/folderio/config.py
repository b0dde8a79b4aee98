"""folderio configuration — Pydantic BaseSettings loaded from .env."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings, overridable via FOLDERIO_* environment variables."""

    log_level: str = "INFO"

    # Streaming persistence
    flush_threshold_bytes: int = 10 * 1024 * 1024  # 10 MiB
    read_chunk_size: int = 256 * 1024  # 256 KiB

    # Where FileSaver writes when no directory is given ("" = ~/Downloads)
    download_dir: str = ""

    # Force security-scoped access on mounts (always on for iOS)
    require_scoped_access: bool = False

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        env_prefix="FOLDERIO_",
        extra="ignore",
    )

    @field_validator("flush_threshold_bytes", "read_chunk_size")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive number of bytes")
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @model_validator(mode="after")
    def _resolve_paths(self) -> "Settings":
        """Ensure the download directory is absolute."""
        if not self.download_dir:
            self.download_dir = str(Path.home() / "Downloads")
        else:
            self.download_dir = str(Path(self.download_dir).expanduser().resolve())
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()

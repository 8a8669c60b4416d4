"""Configuration management for mobiledoc-markdown."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Renderer and CLI options, read from `MOBILEDOC_MD_*` variables or `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # File handling
    encoding: str = Field(
        default="utf-8",
        alias="MOBILEDOC_MD_ENCODING",
    )
    output_suffix: str = Field(
        default=".md",
        alias="MOBILEDOC_MD_OUTPUT_SUFFIX",
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        alias="MOBILEDOC_MD_LOG_LEVEL",
    )

    # What the CLI does with cards/atoms it has no plugin for
    unknown_cards: Literal["error", "skip"] = Field(
        default="error",
        alias="MOBILEDOC_MD_UNKNOWN_CARDS",
    )
    unknown_atoms: Literal["error", "skip", "value"] = Field(
        default="error",
        alias="MOBILEDOC_MD_UNKNOWN_ATOMS",
    )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the cached settings, reading the environment on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """Re-read settings, optionally from *env_file* instead of `.env`."""
    global _settings
    _settings = Settings(_env_file=env_file) if env_file else Settings()
    return _settings

"""
Process settings read from ARENA_* environment variables and the .env file.

Game rules are not configurable here beyond the starting grid size: every
client must agree on them, so they are fixed in arena.core.rules.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from arena.core.rules import DEFAULT_RULES, GameRules
from infra.paths import ENV_FILE, LOG_DIR


class Settings(BaseSettings):
    """Server settings; every field maps to an ARENA_* variable (ARENA_PORT, ...)."""

    model_config = SettingsConfigDict(
        env_prefix="ARENA_",
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    log_level: str = "INFO"
    log_json: bool = False
    log_file: Optional[Path] = LOG_DIR / "arena.log"
    grid_size: int = DEFAULT_RULES.default_grid_size
    logfire: bool = False

    @field_validator("grid_size")
    @classmethod
    def _grid_size_allowed(cls, value: int) -> int:
        if value not in DEFAULT_RULES.allowed_grid_sizes:
            raise ValueError(f"grid_size must be one of {DEFAULT_RULES.allowed_grid_sizes}, got {value}")
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("log_file", mode="before")
    @classmethod
    def _empty_disables_file(cls, value: Any) -> Any:
        # ARENA_LOG_FILE= turns file logging off
        return None if value == "" else value

    def game_rules(self) -> GameRules:
        """Rules for the process, starting on the configured grid size."""
        return DEFAULT_RULES.with_default_grid_size(self.grid_size)


_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Process-wide Settings, built on first use.

    The .env file is also exported to os.environ so libraries that read their
    own variables (LOGFIRE_TOKEN) see it too.
    """
    global _settings
    if _settings is None:
        load_dotenv(ENV_FILE)
        _settings = Settings()
    return _settings

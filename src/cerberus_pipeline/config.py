"""Configuration management for the Cerberus pipeline.

Uses pydantic-settings to load configuration from environment variables
prefixed with ``CERBERUS_`` (and an optional ``.env`` file).
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_env_file() -> Path | None:
    """Search for .env file in the working directory and its parents."""
    check_dir = Path.cwd()
    for _ in range(5):
        if (check_dir / ".env").exists():
            return check_dir / ".env"
        parent = check_dir.parent
        if parent == check_dir:
            break
        check_dir = parent

    return None


_env_file = _find_env_file()


class Settings(BaseSettings):
    """Pipeline settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CERBERUS_",
        env_file=str(_env_file) if _env_file else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================
    # Environment
    # =========================
    environment: Literal["development", "staging", "production"] = "development"

    # =========================
    # Content & Output
    # =========================
    content_root: Path = Field(
        default=Path("cerberus"),
        description="Checked-out content tree holding countries/ and focuspoints/",
    )
    output_dir: Path = Field(
        default=Path("generated"),
        description="Directory the JSON datasets are written to",
    )
    skip_existing: bool = Field(
        default=False,
        description="Reuse an existing dataset file instead of rebuilding it",
    )

    # =========================
    # Resolution
    # =========================
    resolver_collision_policy: Literal["last", "first"] = Field(
        default="last",
        description="Which entity keeps a name shared by several entities",
    )
    suggestion_min_score: int = Field(default=85, ge=0, le=100)
    suggestion_limit: int = Field(default=3, ge=1)

    # =========================
    # Logging
    # =========================
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "text"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

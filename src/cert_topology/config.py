"""
Configuration — typed, validated settings for the resolver process.

These are the settings of the program itself, not the topology document it
resolves. Uses pydantic-settings to:
  - Load from environment variables prefixed CERT_TOPOLOGY_ (12-factor app)
  - Fall back to a .env file at the project root
  - Accept command-line overrides from the entry point
  - Validate types and constraints at startup

The resolved settings are passed explicitly to whatever needs them; nothing
reads them from module state.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the .env file relative to the project root (two levels above this file),
# so settings load correctly regardless of the working directory at runtime.
_ENV_FILE = Path(__file__).parent.parent.parent / ".env"


class AppSettings(BaseSettings):
    """
    Resolver settings.

    Load order (highest priority first):
      1. Command-line arguments (--config_file, --log_level, ...)
      2. Environment variables (CERT_TOPOLOGY_CONFIG_FILE, ...)
      3. .env file
      4. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="CERT_TOPOLOGY_",
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    config_file: Path = Field(
        default=Path("certificates.yaml"),
        description="Certificate topology document to resolve",
    )
    log_level: str = Field(default="INFO", description="Logging level name")
    detect_issuer_cycles: bool = Field(
        default=True,
        description="Reject issuer links that loop without reaching a self-signed root",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Accept only standard logging level names, case-insensitively."""
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level

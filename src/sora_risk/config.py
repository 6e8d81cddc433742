"""Configuration management for the SORA risk engine.

Only presentation and logging are configurable; the regulatory tables and
constants are fixed in code.
"""

from __future__ import annotations

from pathlib import Path

import tomllib
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingConfig(BaseModel):
    """Logging configuration settings."""

    # Logging severity threshold (INFO/DEBUG/etc.).
    level: str = Field(default="WARNING", description="Logging level")
    # Emit JSON if True; otherwise emit a human-readable format.
    json_format: bool = Field(default=True, description="Emit JSON logs")
    # Optional file path for log output; if None, logs go to stderr.
    log_file: str | None = Field(default=None, description="Optional log file path")
    # Maximum size (bytes) before log rotation.
    max_bytes: int = Field(default=1_000_000, ge=1, description="Max log file size before rotation")
    # Number of backup files to retain.
    backup_count: int = Field(default=3, ge=0, description="Number of rotated log files to keep")


class OutputConfig(BaseModel):
    """How assessment results are rendered as JSON."""

    indent: int | None = Field(default=2, ge=0, description="JSON indent, None for compact output")
    include_oso: bool = Field(default=True, description="Include the OSO compliance report")


class SoraSettings(BaseSettings):
    """Configuration settings loaded from env or optional TOML."""

    # Environment keys use SORA_ prefix and "__" nesting.
    model_config = SettingsConfigDict(env_prefix="SORA_", env_nested_delimiter="__", extra="ignore")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def from_toml(cls, path: str | Path) -> "SoraSettings":
        data = tomllib.loads(Path(path).read_text())
        return cls.model_validate(data)

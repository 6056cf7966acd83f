"""
Configuration — typed, validated settings loaded from environment/.env.

Uses pydantic-settings to:
  - Load from ERRBRIDGE_* environment variables
  - Fall back to a .env file
  - Validate types and constraints when the embedding starts up

Only the embedding's composition root instantiates BridgeSettings; the
module-level primitives never read configuration on their own.

    settings = BridgeSettings()
    configure_structlog(settings.log_level, settings.log_format)
    bridge = Bridge.from_settings(settings)
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the .env file relative to the project root (src/errbridge/config.py is
# three levels below it), so settings load regardless of the working directory.
_ENV_FILE = Path(__file__).parent.parent.parent / ".env"


class BridgeSettings(BaseSettings):
    """
    Root settings for an embedding of the bridge.

    Load order (highest priority first):
      1. Environment variables (ERRBRIDGE_LOG_LEVEL, ERRBRIDGE_RESCUE_KINDS, ...)
      2. .env file
      3. Default values

    List values are given as JSON in the environment:
      ERRBRIDGE_RESCUE_KINDS='["StandardError", "ScriptError"]'
    """

    model_config = SettingsConfigDict(
        env_prefix="ERRBRIDGE_",
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Minimum structlog level")
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Renderer: human-readable console lines or JSON lines",
    )
    log_captures: bool = Field(
        default=False,
        description="Emit events for captured, recovered and relayed failures",
    )
    rescue_kinds: list[str] = Field(
        default_factory=lambda: ["StandardError"],
        description="Kind names rescue() recovers from (ancestry membership)",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("rescue_kinds")
    @classmethod
    def validate_rescue_kinds(cls, value: list[str]) -> list[str]:
        """Reject an empty set: rescue() without recoverable kinds never rescues."""
        names = [name.strip() for name in value if name.strip()]
        if not names:
            raise ValueError("rescue_kinds must name at least one failure kind")
        return names

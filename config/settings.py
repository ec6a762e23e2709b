"""Application configuration management using Pydantic Settings."""

from importlib.metadata import PackageNotFoundError, version
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DISTRIBUTION_NAME = "counter-mcp-server"
FALLBACK_VERSION = "0.1.0"


def installed_version() -> str:
    """Version of the installed distribution, or a fixed fallback when running from a checkout."""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return FALLBACK_VERSION


class Settings(BaseSettings):
    """Server settings loaded from environment variables.

    Every field has a default so the server starts with an empty environment.
    """

    # Server identity reported during the initialize handshake
    server_name: str = DISTRIBUTION_NAME
    server_version: str = ""  # Empty means "use the installed distribution version"

    # Counter arithmetic
    # COUNTER_BITS: width of the signed counter. 32 matches a classic int32.
    # OVERFLOW_POLICY:
    # - wrap: two's-complement wraparound at the bounds
    # - saturate: clamp at the bounds
    # - error: refuse the call, value left unchanged
    counter_bits: int = 32
    overflow_policy: Literal["wrap", "saturate", "error"] = "wrap"

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("counter_bits")
    @classmethod
    def check_counter_bits(cls, value: int) -> int:
        if value not in (32, 64):
            raise ValueError("COUNTER_BITS must be 32 or 64")
        return value

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def resolved_version(self) -> str:
        """Version string advertised to clients."""
        return self.server_version or installed_version()


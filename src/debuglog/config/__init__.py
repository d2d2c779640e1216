"""
debuglog Configuration Module.

Each sub-module is an independent concern loaded from its own environment
variables (prefix `DEBUGLOG_`).

Multi-Environment Support:
    Set `DEBUGLOG_ENV` to one of: development, testing, staging, production
    The system will load .env files in this order (later overrides earlier):
    1. .env
    2. .env.local
    3. .env.{environment}
    4. .env.{environment}.local

Usage:
    from debuglog.config import settings

    settings.sink.root_path
    settings.sink.max_file_size
    settings.environment.env
"""

from functools import cached_property
import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from .environment import EnvironmentSettings
from .logging import BridgeLevel, SinkSettings


def _get_env_files() -> tuple[str, ...]:
    """
    Determine which .env files to load based on DEBUGLOG_ENV.

    Called at import time to configure the Settings class.
    """
    env = os.getenv("DEBUGLOG_ENV", "development")
    return (
        ".env",
        ".env.local",
        f".env.{env}",
        f".env.{env}.local",
    )


class Settings(BaseSettings):
    """
    Composite settings aggregating the configuration domains.
    """

    model_config = SettingsConfigDict(
        env_file=_get_env_files(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @cached_property
    def environment(self) -> EnvironmentSettings:
        return EnvironmentSettings()

    @cached_property
    def sink(self) -> SinkSettings:
        return SinkSettings(_env_file=self.environment.env_files)


# Singleton instance
settings = Settings()

__all__ = [
    "Settings",
    "settings",
    "BridgeLevel",
    "EnvironmentSettings",
    "SinkSettings",
]

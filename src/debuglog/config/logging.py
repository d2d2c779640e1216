"""
Logging Sink Configuration.
"""

from enum import Enum
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..constants import (
    DEFAULT_DELETE_LOGS_AFTER,
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_MAX_LOG_FILES_AMOUNT,
    LOGS_DIR_NAME,
)


class BridgeLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class SinkSettings(BaseSettings):
    """Settings for one sink epoch.

    Immutable: a change of settings means a new instance passed to
    ``LogSink.configure``.
    """

    model_config = SettingsConfigDict(
        env_prefix="DEBUGLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    root_path: Path = Field(default=Path("."), description="Directory that holds logs/all and logs/errors")
    max_file_size: int = Field(
        default=DEFAULT_MAX_FILE_SIZE,
        ge=0,
        description="Bytes written to a stream before both streams rotate",
    )
    max_log_files_amount: int = Field(
        default=DEFAULT_MAX_LOG_FILES_AMOUNT,
        ge=0,
        description="Files retained per stream directory",
    )
    delete_logs_after: int = Field(
        default=DEFAULT_DELETE_LOGS_AFTER,
        ge=0,
        description="Age in seconds after which a log file is deleted regardless of count",
    )
    console: bool = Field(default=True, description="Mirror lines to stdout")
    enabled: bool = Field(default=True, description="Master switch; disabled sinks drop every write")
    bridge_level: BridgeLevel = Field(
        default=BridgeLevel.INFO,
        description="Minimum structlog/stdlib level forwarded into the sink",
    )

    @property
    def logs_dir(self) -> Path:
        return self.root_path / LOGS_DIR_NAME

"""Application settings.

Settings are read from ``MLFORGE_``-prefixed environment variables. They
cover how mlforge logs; option defaults of the new command are fixed and
are not configurable here.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

from mlforge.shared.constants import LogConfig


class AppSettings(BaseSettings):
    """Application configuration.

    This class manages application-level settings such as the log level,
    console rendering and an optional JSON log file.
    """

    model_config = {
        "env_prefix": "MLFORGE_",
        "env_ignore_empty": True,
        "extra": "ignore",
    }

    debug: bool = Field(default=False, description="Force DEBUG logging")
    log_level: str = Field(
        default=LogConfig.DEFAULT_LEVEL,
        description="Logging level used before --verbosity is known",
    )
    log_file: str | None = Field(default=None, description="Optional JSON log file path")
    rich_console: bool = Field(
        default=True,
        description="Render console logs with rich instead of JSON lines",
    )

    def effective_log_level(self, requested: str | None = None) -> str:
        """Return DEBUG in debug mode, else the requested or configured level."""
        if self.debug:
            return "DEBUG"
        return (requested or self.log_level).upper()


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Get the process-wide settings instance."""
    return AppSettings()


__all__ = ["AppSettings", "get_settings"]

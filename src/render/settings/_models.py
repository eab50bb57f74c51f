# pyright: reportAny=false, reportExplicitAny=false
"""Settings model for render runs.

Settings are resolved from three layers, later layers overriding earlier:
1. Model defaults
2. ``RENDER_*`` environment variables
3. Command-line flags
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from render.context import deep_merge
from render.engine import DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT
from render.exceptions import SettingsError

from ._env import ENV_PREFIX, parse_env_vars


class LogLevel(StrEnum):
    """Log level threshold values.

    Values are ordered from most verbose (debug) to least verbose (error).
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class RenderSettings(BaseModel):
    """Resolved settings for one render invocation.

    Attributes:
        strict: Fail on absent keys instead of substituting ``<no value>``.
        max_depth: Maximum nesting of ``render`` calls, at most 100.
        debug: Force debug-level logging.
        log_level: Log level threshold.
        log_format: Log output format.
        log_file: Path to log file (empty logs to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    strict: bool = True
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1, le=MAX_DEPTH_LIMIT)
    debug: bool = False
    log_level: LogLevel = LogLevel.WARNING
    log_format: LogFormat = LogFormat.TEXT
    log_file: str = ""

    @property
    def effective_log_level(self) -> LogLevel:
        """Return the log level, accounting for the debug flag."""
        return LogLevel.DEBUG if self.debug else self.log_level

    @classmethod
    def load(
        cls,
        cli_overrides: dict[str, Any] | None = None,
        *,
        environ: dict[str, str] | None = None,
        env_prefix: str = ENV_PREFIX,
    ) -> RenderSettings:
        """Resolve settings from the environment and CLI flags.

        Args:
            cli_overrides: Values from command-line flags (highest precedence).
            environ: Mapping to read instead of `os.environ`.
            env_prefix: Environment variable prefix.

        Returns:
            The validated settings.

        Raises:
            SettingsError: If a value has the wrong type or is out of range.
        """
        merged = parse_env_vars(env_prefix, environ)
        if cli_overrides:
            merged = deep_merge(merged, cli_overrides)
        try:
            return cls.model_validate(merged)
        except ValidationError as e:
            msg = f"Invalid settings: {e}"
            raise SettingsError(msg) from e

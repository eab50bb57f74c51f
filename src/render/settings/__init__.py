"""render settings.

Example:
    >>> from render.settings import RenderSettings
    >>> settings = RenderSettings.load({"strict": False}, environ={})
    >>> settings.strict
    False
"""

from render.exceptions import SettingsError

from ._env import ENV_PREFIX, parse_env_vars, parse_string_value
from ._models import LogFormat, LogLevel, RenderSettings

__all__ = [
    "ENV_PREFIX",
    "LogFormat",
    "LogLevel",
    "RenderSettings",
    "SettingsError",
    "parse_env_vars",
    "parse_string_value",
]

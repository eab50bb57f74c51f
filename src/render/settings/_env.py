# pyright: reportAny=false, reportExplicitAny=false
"""Environment variable parsing for settings."""

import json
import os
from typing import Any

from render.context import set_nested_key

ENV_PREFIX = "RENDER_"


def parse_env_vars(
    prefix: str = ENV_PREFIX,
    environ: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Collect prefixed environment variables into a settings dictionary.

    The prefix is dropped and the rest lowercased, with a double underscore
    marking a nested key: ``RENDER_LOG_LEVEL`` sets ``log_level`` and
    ``RENDER_A__B`` sets ``a.b``. Values go through `parse_string_value`.

    Args:
        prefix: Variable name prefix.
        environ: Mapping to read instead of `os.environ`.

    Returns:
        Nested dictionary of parsed values.
    """
    source = os.environ if environ is None else environ
    parsed: dict[str, Any] = {}

    for key, value in source.items():
        if not key.startswith(prefix):
            continue

        settings_key = key[len(prefix) :]
        if not settings_key:
            continue

        settings_path = settings_key.replace("__", ".").lower()
        set_nested_key(parsed, settings_path, parse_string_value(value))

    return parsed


def parse_string_value(value: str) -> Any:
    """Convert an environment string into a settings value.

    ``true`` and ``false`` in any case become booleans. Numbers become ints,
    or floats when they contain a dot. Text wrapped in brackets or braces is
    tried as JSON. Anything else stays a string.

    Examples:
        >>> parse_string_value("FALSE")
        False
        >>> parse_string_value("8")
        8
        >>> parse_string_value("json")
        'json'
    """
    if value.lower() in ("true", "false"):
        return value.lower() == "true"

    number_type = float if "." in value else int
    try:
        return number_type(value)
    except ValueError:
        pass

    if value[:1] + value[-1:] in ("[]", "{}"):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            pass

    return value

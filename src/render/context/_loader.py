# pyright: reportAny=false
"""YAML configuration file loading and merging."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

import yaml

from render.exceptions import ConfigLoadError

from ._merge import deep_merge

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from ._values import ContextTree


def parse_yaml_config(content: str, *, path: Path | None = None) -> ContextTree:
    """Parse YAML text into a configuration tree.

    Args:
        content: YAML document text.
        path: Originating file, used for error context.

    Returns:
        Parsed configuration as a dictionary. An empty document yields an
        empty dictionary.

    Raises:
        ConfigLoadError: If the text is not valid YAML or its top level is
            not a mapping.
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        msg = f"Failed to parse YAML config: {e}"
        raise ConfigLoadError(
            msg,
            path=path,
            line=mark.line + 1 if mark is not None else None,
            column=mark.column + 1 if mark is not None else None,
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"YAML config must be a mapping at the top level, got {type(data).__name__}"
        raise ConfigLoadError(msg, path=path)

    return cast("ContextTree", data)


def read_yaml_file(path: Path) -> ContextTree:
    """Read and parse a YAML configuration file.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed YAML content as dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigLoadError: If the file is not UTF-8 text or cannot be parsed.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        msg = f"Failed to decode YAML config as UTF-8: {e.reason} at byte {e.start}"
        raise ConfigLoadError(msg, path=path) from e
    return parse_yaml_config(content, path=path)


def load_config_files(paths: Iterable[Path]) -> ContextTree:
    """Load and merge configuration files in order.

    Later files override earlier ones using `deep_merge` rules.

    Args:
        paths: Configuration files, lowest precedence first.

    Returns:
        The merged configuration tree.

    Raises:
        FileNotFoundError: If a file does not exist.
        ConfigLoadError: If a file cannot be parsed.
    """
    merged: ContextTree = {}
    for path in paths:
        _ = deep_merge(merged, read_yaml_file(path))
    return merged

"""Evaluation context construction.

This module merges the variable sources of a render call into a single
context tree: configuration files first, then CLI variables, then, for
nested renders, an override tree.

Example:
    >>> from render.context import build_context, build_nested_context
    >>> ctx = build_context({"a": 1, "x": "outer"}, ["a=2"])
    >>> ctx["a"]
    '2'
    >>> build_nested_context(ctx, {"x": "inner"})["x"]
    'inner'
"""

# Re-export exceptions from main exceptions module
from render.exceptions import (
    ConfigLoadError,
    MalformedVariableError,
    MergeConflictError,
)

from ._builder import build_context, build_nested_context
from ._loader import load_config_files, parse_yaml_config, read_yaml_file
from ._merge import deep_merge, set_nested_key, split_path
from ._values import ContextTree, ContextValue, Scalar, copy_tree, copy_value
from ._variables import Variable, parse_variable, parse_variables

__all__ = [
    "ConfigLoadError",
    "ContextTree",
    "ContextValue",
    "MalformedVariableError",
    "MergeConflictError",
    "Scalar",
    "Variable",
    "build_context",
    "build_nested_context",
    "copy_tree",
    "copy_value",
    "deep_merge",
    "load_config_files",
    "parse_variable",
    "parse_variables",
    "parse_yaml_config",
    "read_yaml_file",
    "set_nested_key",
    "split_path",
]

"""Evaluation context construction."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._merge import deep_merge
from ._values import copy_tree
from ._variables import parse_variables

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from ._values import ContextTree, ContextValue


def build_context(
    config: Mapping[str, ContextValue] | None = None,
    variables: Iterable[str] = (),
) -> ContextTree:
    """Build the top-level context for a render call.

    Context is merged in order (later values override earlier):
    1. Configuration tree (file-provided defaults)
    2. CLI variables, each applied in the order given

    Args:
        config: Parsed configuration tree, or None if absent.
        variables: Raw ``path=value`` strings.

    Returns:
        A fresh context tree. Neither input is modified.

    Raises:
        MalformedVariableError: If a variable string fails to parse.
        MergeConflictError: If variables conflict on a dotted path.
    """
    context: ContextTree = copy_tree(dict(config)) if config else {}
    return deep_merge(context, parse_variables(variables))


def build_nested_context(
    parent: Mapping[str, ContextValue],
    override: Mapping[str, ContextValue] | None = None,
) -> ContextTree:
    """Build a derived context for a nested render.

    Starts from a structural copy of `parent` and merges `override` on top,
    so the override wins for this nested evaluation only. Mutating the
    returned tree is never observable through `parent`.

    Args:
        parent: Context of the enclosing evaluation.
        override: Override tree for the nested evaluation.

    Returns:
        A fresh context tree.
    """
    context = copy_tree(dict(parent))
    if override:
        _ = deep_merge(context, dict(override))
    return context

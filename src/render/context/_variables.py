"""Parsing of ``path=value`` variable strings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from render.exceptions import MalformedVariableError

from ._merge import set_nested_key

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ._values import ContextTree

_QUOTES = ('"', "'")


@dataclass(frozen=True, slots=True)
class Variable:
    """A single parsed ``path=value`` entry.

    Attributes:
        path: Segments of the dotted key path.
        value: The value, with one layer of surrounding quotes removed.
        raw: The original text the entry was parsed from.
    """

    path: tuple[str, ...]
    value: str
    raw: str

    @property
    def key_path(self) -> str:
        """Return the dotted key path."""
        return ".".join(self.path)


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def parse_variable(text: str) -> Variable:
    """Parse a ``path=value`` string.

    The text is split on the first ``=``. The path is a dot-delimited
    sequence of non-empty segments. The value is taken verbatim except that
    one layer of matching surrounding quotes (``"..."`` or ``'...'``) is
    stripped, preserving internal whitespace.

    Args:
        text: The raw variable string, e.g. ``third.nested='and value 3'``.

    Returns:
        The parsed Variable.

    Raises:
        MalformedVariableError: If there is no ``=``, the path is empty, or
            any path segment is empty or contains whitespace.

    Examples:
        >>> parse_variable("second='value 2'").value
        'value 2'
        >>> parse_variable("third.nested=x").path
        ('third', 'nested')
    """
    key_path, sep, value = text.partition("=")
    if not sep:
        msg = f"invalid variable '{text}': expected the form key=value"
        raise MalformedVariableError(msg, variable=text)

    key_path = key_path.strip()
    if not key_path:
        msg = f"invalid variable '{text}': key must not be empty"
        raise MalformedVariableError(msg, variable=text)

    segments = tuple(key_path.split("."))
    for segment in segments:
        if not segment or segment != "".join(segment.split()):
            msg = f"invalid variable '{text}': malformed key path '{key_path}'"
            raise MalformedVariableError(msg, variable=text)

    return Variable(path=segments, value=_strip_quotes(value), raw=text)


def parse_variables(texts: Iterable[str]) -> ContextTree:
    """Parse variable strings into a nested tree.

    Entries are applied in order, so a later entry overwrites an earlier one
    at the same path.

    Raises:
        MalformedVariableError: If any entry fails to parse.
        MergeConflictError: If an entry's path runs through a value set by
            an earlier entry.
    """
    tree: ContextTree = {}
    for text in texts:
        variable = parse_variable(text)
        set_nested_key(tree, variable.key_path, variable.value)
    return tree

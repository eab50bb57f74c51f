# pyright: reportAny=false, reportExplicitAny=false
"""Jinja2 Environment factory and the template function table."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from functools import cache, lru_cache
from types import MappingProxyType
from typing import Any

from jinja2 import Environment

from ._functions import FILTERS, GLOBALS
from ._undefined import method_undefined_for, undefined_for


def _freeze(functions: Mapping[str, Callable[..., Any]]) -> Mapping[str, Callable[..., Any]]:
    return MappingProxyType(dict(functions))


@dataclass(frozen=True, slots=True, eq=False)
class FunctionTable:
    """Immutable set of helper functions exposed to templates.

    A table is built once and passed explicitly into each evaluation.
    Extending a table returns a new table; the original is never modified.

    Attributes:
        filters: Functions usable with the pipe syntax, ``value | name(...)``.
        globals: Functions callable by name, ``name(...)``.
    """

    filters: Mapping[str, Callable[..., Any]] = field(
        default_factory=lambda: _freeze({})
    )
    globals: Mapping[str, Callable[..., Any]] = field(
        default_factory=lambda: _freeze({})
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "filters", _freeze(self.filters))
        object.__setattr__(self, "globals", _freeze(self.globals))

    def extend(
        self,
        *,
        filters: Mapping[str, Callable[..., Any]] | None = None,
        globals: Mapping[str, Callable[..., Any]] | None = None,  # noqa: A002
    ) -> FunctionTable:
        """Return a new table with additional or replaced functions."""
        return FunctionTable(
            filters={**self.filters, **(filters or {})},
            globals={**self.globals, **(globals or {})},
        )


@cache
def default_function_table() -> FunctionTable:
    """Return the standard function table shared by all renders."""
    return FunctionTable(filters=FILTERS, globals=GLOBALS)


class ContextEnvironment(Environment):
    """Environment whose lookups on mappings only ever resolve keys.

    Jinja2 tries Python attributes before items for ``a.b``, and falls back
    to attributes for ``a["b"]``, which makes names such as ``items`` or
    ``get`` resolve to dict methods. Here a mapping key always wins and an
    absent key is undefined. An absent key naming a mapping method can
    still be called, so ``data.items()`` keeps working.
    """

    def getattr(self, obj: Any, attribute: str) -> Any:
        if not isinstance(obj, Mapping):
            return super().getattr(obj, attribute)
        try:
            return obj[attribute]
        except KeyError:
            pass
        return self._undefined_key(obj, attribute)

    def getitem(self, obj: Any, argument: Any) -> Any:
        if not isinstance(obj, Mapping) or not isinstance(argument, str):
            return super().getitem(obj, argument)
        try:
            return obj[argument]
        except KeyError:
            pass
        return self._undefined_key(obj, argument)

    def _undefined_key(self, obj: Mapping[Any, Any], name: str) -> Any:
        if callable(getattr(obj, name, None)):
            return method_undefined_for(self.undefined)(obj=obj, name=name)
        return self.undefined(obj=obj, name=name)


@lru_cache(maxsize=32)
def create_environment(functions: FunctionTable, *, strict: bool) -> Environment:
    """Create a Jinja2 Environment for the given functions and key policy.

    The environment is configured for plain-text templates: no
    autoescaping, no block trimming, and trailing newlines preserved.
    Environments are cached per (table, strict) pair; tables compare by
    identity.

    Args:
        functions: Helper functions to register.
        strict: If True, absent keys raise; otherwise they render as the
            ``<no value>`` sentinel.

    Returns:
        Configured Jinja2 Environment.
    """
    from ._evaluate import render_filter  # noqa: PLC0415

    env = ContextEnvironment(
        undefined=undefined_for(strict=strict),
        autoescape=False,  # noqa: S701
        keep_trailing_newline=True,
        extensions=["jinja2.ext.do", "jinja2.ext.loopcontrols"],
    )
    env.filters.update(functions.filters)
    env.filters["render"] = render_filter
    env.globals.update(functions.globals)
    return env

# pyright: reportIncompatibleMethodOverride=false
"""Key resolution policies for absent context keys.

Strict mode raises on any use of an absent key. Lenient mode substitutes
the ``<no value>`` sentinel and never raises for a lookup.
"""

from collections.abc import Mapping
from functools import partial
from typing import Any

from jinja2 import ChainableUndefined, StrictUndefined, Undefined, UndefinedError
from jinja2.utils import missing

NO_VALUE = "<no value>"
"""Text substituted for absent keys in lenient mode."""


class UndefinedKeyError(UndefinedError):
    """Raised by StrictKeyUndefined when an absent key is used."""

    def __init__(self, message: str | None = None, *, key: str | None) -> None:
        super().__init__(message)
        self.key: str | None = key


def missing_key_message(name: str | None, obj: object = missing) -> str:
    """Describe a lookup of `name` that found nothing.

    Args:
        name: The key or attribute that was looked up.
        obj: The object the lookup was made on, or `missing` for a
            top-level context lookup.

    Returns:
        A human-readable cause, e.g. ``map has no entry for key "x"``.
    """
    if obj is missing or isinstance(obj, Mapping):
        return f'map has no entry for key "{name}"'
    return f'can\'t evaluate field "{name}" in type {type(obj).__name__}'


class StrictKeyUndefined(StrictUndefined):
    """Undefined that fails on any use, naming the missing key."""

    __slots__ = ()

    def __init__(
        self,
        hint: str | None = None,
        obj: Any = missing,  # pyright: ignore[reportExplicitAny]
        name: str | None = None,
        exc: type[UndefinedError] = UndefinedError,  # noqa: ARG002
    ) -> None:
        super().__init__(hint, obj, name, partial(UndefinedKeyError, key=name))  # pyright: ignore[reportArgumentType]

    @property
    def _undefined_message(self) -> str:
        if self._undefined_hint:
            return self._undefined_hint
        return missing_key_message(self._undefined_name, self._undefined_obj)


class SentinelUndefined(ChainableUndefined):
    """Undefined that renders as the sentinel and chains through lookups.

    It is falsy, iterates as empty, and returns itself for any further
    attribute or item access, so ``a.b.c`` with ``a`` absent still renders
    the sentinel instead of raising.
    """

    __slots__ = ()

    def __str__(self) -> str:
        return NO_VALUE


def undefined_for(*, strict: bool) -> type[Undefined]:
    """Return the Undefined class implementing the given key policy."""
    return StrictKeyUndefined if strict else SentinelUndefined


class _MappingMethodMixin:
    """Undefined for a key a mapping lacks but has a method of that name.

    Calling it invokes the method, so ``data.items()`` works on a context
    mapping without a key named ``items``. Any other use behaves as the
    absent key.
    """

    __slots__ = ()

    # Read by jinja2.runtime.Context.call before the call is made.
    jinja_pass_arg = None

    def __call__(self, *args: Any, **kwargs: Any) -> Any:  # pyright: ignore[reportExplicitAny]
        method = getattr(self._undefined_obj, self._undefined_name)  # pyright: ignore[reportAttributeAccessIssue]
        return method(*args, **kwargs)


class StrictMethodUndefined(_MappingMethodMixin, StrictKeyUndefined):
    """Strict absent key that can still be called as a mapping method."""

    __slots__ = ()


class SentinelMethodUndefined(_MappingMethodMixin, SentinelUndefined):
    """Lenient absent key that can still be called as a mapping method."""

    __slots__ = ()

    def __getattr__(self, name: str) -> Any:  # pyright: ignore[reportExplicitAny]
        if name[:2] == "__":
            raise AttributeError(name)
        return SentinelUndefined(name=name)

    __getitem__ = __getattr__


_METHOD_UNDEFINED: dict[type[Undefined], type[Undefined]] = {
    StrictKeyUndefined: StrictMethodUndefined,
    SentinelUndefined: SentinelMethodUndefined,
}


def method_undefined_for(undefined: type[Undefined]) -> type[Undefined]:
    """Return the callable variant of an Undefined class, if it has one."""
    return _METHOD_UNDEFINED.get(undefined, undefined)

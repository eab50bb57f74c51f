"""Context value types."""

from datetime import date, datetime
from typing import cast

# A context value is a scalar, a sequence of values, or a mapping of values.
type Scalar = str | int | float | bool | None | date | datetime
type ContextValue = Scalar | list[ContextValue] | dict[str, ContextValue]
type ContextTree = dict[str, ContextValue]


def copy_value(value: ContextValue) -> ContextValue:
    """Create a structural copy of a context value.

    Mappings and sequences are copied recursively so the returned structure
    shares no mutable containers with the original. Scalars are immutable and
    returned as-is.

    Args:
        value: The value to copy.

    Returns:
        An independent copy of the value.
    """
    match value:
        case dict():
            return {k: copy_value(v) for k, v in value.items()}
        case list():
            return [copy_value(item) for item in value]
        case _:
            return value


def copy_tree(tree: ContextTree) -> ContextTree:
    """Create a structural copy of a context tree."""
    return cast("ContextTree", copy_value(tree))

"""Deep merging and dotted-path insertion for context trees."""

from render.exceptions import MergeConflictError

from ._values import ContextTree, ContextValue, copy_value


def deep_merge(dst: ContextTree, src: ContextTree) -> ContextTree:
    """Deep merge `src` into `dst` in place.

    Args:
        dst: Tree receiving the values (lower precedence). Modified in place.
        src: Tree supplying the values (higher precedence). Never modified.

    Returns:
        `dst`, for chaining.

    Merge rules:
        - Mappings present on both sides are merged recursively, key by key
        - Sequences are replaced entirely (no element-wise merge)
        - Scalars are replaced with the `src` value
        - A scalar replacing a mapping, or the reverse, replaces wholesale
        - Keys missing from `src` keep their `dst` values

    Values taken from `src` are copied, so `dst` never aliases containers
    owned by `src`. Merging the same `src` twice yields the same tree as
    merging it once.
    """
    for key, src_val in src.items():
        match dst.get(key), src_val:
            case dict() as dst_child, dict() as src_child:
                _ = deep_merge(dst_child, src_child)
            case _:
                dst[key] = copy_value(src_val)
    return dst


def split_path(key_path: str) -> list[str]:
    """Split a dotted key path into its segments."""
    return key_path.split(".")


def set_nested_key(tree: ContextTree, key_path: str, value: ContextValue) -> None:
    """Set a value at a dotted key path in a nested tree.

    Creates intermediate mappings as needed. An existing value at the final
    segment is overwritten.

    Args:
        tree: The tree to modify.
        key_path: Dotted key path (e.g., "resources.limits.cpu").
        value: The value to set.

    Raises:
        MergeConflictError: If an intermediate segment already holds a
            scalar or sequence.

    Example:
        >>> t = {}
        >>> set_nested_key(t, "third.nested", "and value 3")
        >>> t
        {'third': {'nested': 'and value 3'}}
    """
    parts = split_path(key_path)
    current = tree

    for depth, part in enumerate(parts[:-1], start=1):
        match current.get(part):
            case None if part not in current:
                child: ContextTree = {}
                current[part] = child
                current = child
            case dict() as child:
                current = child
            case blocking:
                blocked_at = ".".join(parts[:depth])
                msg = (
                    f"cannot set '{key_path}': '{blocked_at}' already holds "
                    f"a {type(blocking).__name__} value"
                )
                raise MergeConflictError(msg, path=key_path)

    current[parts[-1]] = value

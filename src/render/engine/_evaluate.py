"""Template evaluation.

`evaluate` compiles a template and renders it against a context. Templates
can compose other templates through the ``render`` function::

    {{ inner | render(override) }}     {# filter form #}
    {{ render(override, inner) }}      {# function form #}

Each nested call renders its template against a copy of the current
context with the override merged on top, one level deeper than the caller.
Faults from a nested call are re-raised as NestedRenderError positioned in
the enclosing template.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import TYPE_CHECKING

from jinja2 import TemplateSyntaxError, Undefined, pass_context

from render.context import build_nested_context, copy_tree
from render.exceptions import (
    CompileError,
    EvaluationError,
    MissingKeyError,
    NestedRenderError,
    RecursionLimitError,
    TemplateExecutionError,
)

from ._environment import create_environment, default_function_table
from ._reporter import describe_exception, locate_fault, locate_syntax_error
from ._undefined import UndefinedKeyError

if TYPE_CHECKING:
    from types import CodeType, TracebackType

    from jinja2.runtime import Context

    from render.context import ContextValue

    from ._environment import FunctionTable

DEFAULT_LABEL = "template"
"""Source label used when the caller does not name the template."""

NESTED_LABEL = "render"
"""Source label of templates rendered through the ``render`` function."""

DEFAULT_MAX_DEPTH = 64
"""Maximum nesting of ``render`` calls."""

MAX_DEPTH_LIMIT = 100
"""Largest nesting limit that stays within the interpreter's recursion limit."""

_SCOPE_KEY = "__render_scope__"


class _DepthExceededError(Exception):
    """Raised by a render call that would exceed the nesting limit."""


@dataclass(frozen=True, slots=True)
class _RenderScope:
    """State of one evaluation, passed explicitly to nested renders."""

    context: Mapping[str, ContextValue]
    functions: FunctionTable
    strict: bool
    depth: int
    max_depth: int

    def render(self, template: object, override: object = None) -> str:
        """Render `template` against this scope's context plus `override`."""
        if isinstance(override, Undefined):
            if self.strict:
                override._fail_with_undefined_error()  # pyright: ignore[reportPrivateUsage]
            override = None
        if override is not None and not isinstance(override, Mapping):
            msg = f"override must be a mapping, got {type(override).__name__}"
            raise TypeError(msg)
        if isinstance(template, Undefined):
            template = str(template)
        if not isinstance(template, str):
            msg = f"template must be a string, got {type(template).__name__}"
            raise TypeError(msg)
        if self.depth >= self.max_depth:
            raise _DepthExceededError

        child = replace(
            self,
            context=build_nested_context(self.context, override),
            depth=self.depth + 1,
        )
        return _evaluate(template, child, label=NESTED_LABEL)

    def __call__(self, override: object, template: object) -> str:
        return self.render(template, override)


@pass_context
def render_filter(ctx: Context, template: object, override: object = None) -> str:
    """Filter form of ``render``: ``template | render(override)``."""
    scope: _RenderScope = ctx.get(_SCOPE_KEY)
    return scope.render(template, override)


@lru_cache(maxsize=32)
def _helper_names(functions: FunctionTable) -> dict[CodeType, str]:
    names: dict[CodeType, str] = {}
    for name, func in {**functions.globals, **functions.filters}.items():
        code = getattr(func, "__code__", None)
        if code is not None:
            names[code] = name
    names[render_filter.__code__] = "render"
    names[_RenderScope.__call__.__code__] = "render"
    return names


def _nesting_reached(tb: TracebackType | None) -> int:
    code = _RenderScope.render.__code__
    depth = 0
    while tb is not None:
        if tb.tb_frame.f_code is code:
            depth += 1
        tb = tb.tb_next
    return depth


def evaluate(
    template: str,
    context: Mapping[str, ContextValue],
    *,
    strict: bool = True,
    functions: FunctionTable | None = None,
    label: str = DEFAULT_LABEL,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> str:
    """Evaluate a template against a context.

    Evaluation is all-or-nothing: it returns the complete output or raises,
    never both. The template works on a copy of the context.

    Args:
        template: Template text.
        context: Values available to the template.
        strict: If True, using an absent key raises MissingKeyError.
            Otherwise absent keys render as ``<no value>``.
        functions: Helper functions; defaults to the standard table.
        label: Source name used in error positions (e.g. a file path or
            ``stdin``).
        max_depth: Maximum nesting of ``render`` calls.

    Returns:
        The rendered text.

    Raises:
        CompileError: If the template has a syntax error.
        MissingKeyError: If a strict-mode lookup finds no value.
        NestedRenderError: If a nested ``render`` call fails.
        RecursionLimitError: If ``render`` calls nest deeper than max_depth,
            or deep enough to exhaust the interpreter's recursion limit.
        TemplateExecutionError: For any other evaluation fault.

    Example:
        >>> evaluate("Hello {{ name }}", {"name": "World"})
        'Hello World'
    """
    scope = _RenderScope(
        context=copy_tree(dict(context)),
        functions=functions if functions is not None else default_function_table(),
        strict=strict,
        depth=0,
        max_depth=max_depth,
    )
    return _evaluate(template, scope, label=label)


def _evaluate(template: str, scope: _RenderScope, *, label: str) -> str:
    env = create_environment(scope.functions, strict=scope.strict)

    try:
        code = env.compile(template, name=label, filename=label)
    except TemplateSyntaxError as e:
        position = locate_syntax_error(e, label=label, source=template)
        raise CompileError(e.message or str(e), position=position) from e

    compiled = env.template_class.from_code(
        env, code, env.make_globals({_SCOPE_KEY: scope, "render": scope})
    )

    try:
        return compiled.render(scope.context)
    except RecursionLimitError:
        raise
    except EvaluationError as e:
        position, _ = locate_fault(
            e.__traceback__, label=label, source=template, needle="render"
        )
        raise NestedRenderError(position=position, inner=e) from e
    except _DepthExceededError as e:
        position, _ = locate_fault(
            e.__traceback__, label=label, source=template, needle="render"
        )
        raise RecursionLimitError(position=position, depth=scope.max_depth) from e
    except RecursionError as e:
        if scope.depth > 0:
            raise
        reached = _nesting_reached(e.__traceback__)
        if not reached:
            raise _execution_error(e, scope, label=label, template=template) from e
        position, _ = locate_fault(
            e.__traceback__, label=label, source=template, needle="render"
        )
        raise RecursionLimitError(position=position, depth=reached) from e
    except UndefinedKeyError as e:
        position, _ = locate_fault(
            e.__traceback__, label=label, source=template, needle=e.key
        )
        raise MissingKeyError(
            e.message or str(e), position=position, key=e.key or ""
        ) from e
    except Exception as e:
        raise _execution_error(e, scope, label=label, template=template) from e


def _execution_error(
    exc: Exception, scope: _RenderScope, *, label: str, template: str
) -> TemplateExecutionError:
    position, helper = locate_fault(
        exc.__traceback__,
        label=label,
        source=template,
        helpers=_helper_names(scope.functions),
    )
    return TemplateExecutionError(describe_exception(exc, helper), position=position)


r"""render template engine.

Compiles Jinja2 templates and evaluates them against a context tree, with a
helper function library and a recursive ``render`` function for composing
templates.

Basic usage:
    from render.context import build_context
    from render.engine import evaluate

    context = build_context({"name": "app"}, ["replicas=3"])
    result = evaluate("name: {{ name }}\nreplicas: {{ replicas }}", context)

Nested renders:
    context = {
        "x": "outer",
        "inner": "key: {{ x }}",
        "override": {"x": "other"},
    }
    evaluate("{{ inner | render(override) }}", context)  # "key: other"

Lenient key resolution:
    evaluate("{{ missing }}", {}, strict=False)  # "<no value>"
"""

from render.exceptions import (
    CompileError,
    EvaluationError,
    MissingKeyError,
    NestedRenderError,
    RecursionLimitError,
    SourcePosition,
    TemplateExecutionError,
)

from ._environment import (
    ContextEnvironment,
    FunctionTable,
    create_environment,
    default_function_table,
)
from ._evaluate import (
    DEFAULT_LABEL,
    DEFAULT_MAX_DEPTH,
    MAX_DEPTH_LIMIT,
    NESTED_LABEL,
    evaluate,
)
from ._reporter import format_error, locate_column
from ._undefined import NO_VALUE, SentinelUndefined, StrictKeyUndefined

__all__ = [
    "DEFAULT_LABEL",
    "DEFAULT_MAX_DEPTH",
    "MAX_DEPTH_LIMIT",
    "NESTED_LABEL",
    "NO_VALUE",
    "CompileError",
    "ContextEnvironment",
    "EvaluationError",
    "FunctionTable",
    "MissingKeyError",
    "NestedRenderError",
    "RecursionLimitError",
    "SentinelUndefined",
    "SourcePosition",
    "StrictKeyUndefined",
    "TemplateExecutionError",
    "create_environment",
    "default_function_table",
    "evaluate",
    "format_error",
    "locate_column",
]

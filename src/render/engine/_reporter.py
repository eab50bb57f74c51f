"""Source positions and human-readable messages for render faults."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from render.exceptions import (
    ConfigLoadError,
    EvaluationError,
    SourcePosition,
    TemplateLoadError,
)

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping
    from types import CodeType, TracebackType

    from jinja2 import TemplateSyntaxError

    from render.exceptions import RenderError

# Template tags on a single line; a tag left open runs to the end of the line.
_TAG_PATTERN = re.compile(r"\{[{%](?:.*?[}%]\}|.*$)")


def source_line(source: str, line: int) -> str:
    """Return the 1-based `line` of `source`, or an empty string."""
    lines = source.splitlines()
    if 1 <= line <= len(lines):
        return lines[line - 1]
    return ""


def locate_column(line_text: str, needle: str | None = None) -> int:
    """Find the 1-based column of the offending expression on a line.

    Args:
        line_text: The text of the template line.
        needle: Name to look for inside template tags (a key or function).

    Returns:
        The column of `needle` within the first tag containing it, else the
        column of the first tag opener, else 1.
    """
    tags = list(_TAG_PATTERN.finditer(line_text))
    if needle:
        word = re.compile(rf"(?<!\w){re.escape(needle)}(?!\w)")
        for tag in tags:
            match = word.search(line_text, tag.start(), tag.end())
            if match:
                return match.start() + 1
    if tags:
        return tags[0].start() + 1
    return 1


def _walk(tb: TracebackType | None) -> Iterator[TracebackType]:
    while tb is not None:
        yield tb
        tb = tb.tb_next


def locate_fault(
    tb: TracebackType | None,
    *,
    label: str,
    source: str,
    needle: str | None = None,
    helpers: Mapping[CodeType, str] | None = None,
) -> tuple[SourcePosition, str | None]:
    """Locate a runtime fault within a template.

    Jinja2 rewrites tracebacks so frames executing template code carry the
    template filename and line. The innermost such frame with `label` as its
    filename is the offending line. The first later frame belonging to a
    registered helper names the function that raised.

    Args:
        tb: Traceback of the fault.
        label: Filename the template was compiled with.
        source: Template text.
        needle: Name to locate on the line. Defaults to the helper name.
        helpers: Code objects of helper functions mapped to template names.

    Returns:
        Tuple of (position, helper name or None).
    """
    frames = list(_walk(tb))
    template_indices = [
        i for i, frame in enumerate(frames) if frame.tb_frame.f_code.co_filename == label
    ]
    if not template_indices:
        return SourcePosition(label, 1, 1), None

    last = template_indices[-1]
    line = frames[last].tb_lineno
    helper: str | None = None
    if helpers:
        # Calls to globals pass through jinja2.runtime.Context.call first.
        for frame in frames[last + 1 :]:
            helper = helpers.get(frame.tb_frame.f_code)
            if helper is not None:
                break

    column = locate_column(source_line(source, line), needle or helper)
    return SourcePosition(label, line, column), helper


def locate_syntax_error(
    exc: TemplateSyntaxError, *, label: str, source: str
) -> SourcePosition:
    """Return the position of a template syntax error."""
    line = exc.lineno or 1
    return SourcePosition(label, line, locate_column(source_line(source, line)))


def describe_exception(exc: BaseException, helper: str | None = None) -> str:
    """Describe a runtime fault, naming the helper that raised if known."""
    reason = str(exc) or type(exc).__name__
    if helper:
        return f"error calling {helper}: {reason}"
    return reason


def format_error(exc: RenderError) -> str:
    """Format a render fault for display.

    Evaluation faults already carry ``label:line:column: cause``. Config
    load faults are qualified with the file path and, when known, the
    position of the YAML problem. Template read faults name the file.
    """
    if isinstance(exc, EvaluationError):
        return str(exc)
    if isinstance(exc, ConfigLoadError) and exc.path is not None:
        if exc.line is not None:
            return f"{exc.path}:{exc.line}:{exc.column or 1}: {exc}"
        return f"{exc.path}: {exc}"
    if isinstance(exc, TemplateLoadError):
        return f"{exc.path}: {exc}"
    return str(exc)

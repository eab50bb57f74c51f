"""render exceptions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class RenderError(Exception):
    """Base exception for render errors."""


# =============================================================================
# Context Exceptions
# =============================================================================


class MalformedVariableError(RenderError):
    """Raised when a variable string is not of the form ``path=value``."""

    def __init__(self, message: str, *, variable: str) -> None:
        """Initialize with error message and the offending variable text."""
        super().__init__(message)
        self.variable: str = variable


class MergeConflictError(RenderError):
    """Raised when a dotted path runs through an existing non-mapping value."""

    def __init__(self, message: str, *, path: str) -> None:
        """Initialize with error message and the conflicting path."""
        super().__init__(message)
        self.path: str = path


class ConfigLoadError(RenderError):
    """Raised when a configuration file cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class TemplateLoadError(RenderError):
    """Raised when a template file cannot be read as text."""

    def __init__(self, message: str, *, path: Path) -> None:
        """Initialize with error message and the template path."""
        super().__init__(message)
        self.path: Path = path


class SettingsError(RenderError):
    """Raised when settings from the environment or CLI fail validation."""


# =============================================================================
# Evaluation Exceptions
# =============================================================================


@dataclass(frozen=True, slots=True)
class SourcePosition:
    """A 1-based location inside a named template source."""

    label: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.label}:{self.line}:{self.column}"


class EvaluationError(RenderError):
    """Base exception for faults raised while compiling or evaluating a template.

    Attributes:
        position: Where in the template the fault originated.
        cause: Human-readable description of the fault.
    """

    def __init__(self, cause: str, *, position: SourcePosition) -> None:
        """Initialize with the cause text and source position."""
        super().__init__(f"{position}: {cause}")
        self.position: SourcePosition = position
        self.cause: str = cause


class CompileError(EvaluationError):
    """Template text is not valid template syntax."""


class MissingKeyError(EvaluationError):
    """A strict-mode lookup referenced a key absent from the context."""

    def __init__(self, cause: str, *, position: SourcePosition, key: str) -> None:
        """Initialize with the cause text, position, and missing key."""
        super().__init__(cause, position=position)
        self.key: str = key


class NestedRenderError(EvaluationError):
    """A fault raised inside a nested ``render`` call."""

    def __init__(self, *, position: SourcePosition, inner: EvaluationError) -> None:
        """Initialize with the position of the call and the wrapped fault."""
        super().__init__(f"error calling render: {inner}", position=position)
        self.inner: EvaluationError = inner


class RecursionLimitError(EvaluationError):
    """Nested ``render`` calls exceeded the configured depth."""

    def __init__(self, *, position: SourcePosition, depth: int) -> None:
        """Initialize with the position of the call and the depth limit."""
        super().__init__(
            f"error calling render: nesting exceeds maximum depth of {depth}",
            position=position,
        )
        self.depth: int = depth


class TemplateExecutionError(EvaluationError):
    """Any other fault raised while executing a template."""

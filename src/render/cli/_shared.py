"""Exit codes and error output for the render command."""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Never

from rich.markup import escape

if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "ExitCode",
    "exit_with_error",
    "get_error_console",
]


class ExitCode(IntEnum):
    """Process exit status of a render run."""

    SUCCESS = 0
    ERROR = 1


def get_error_console() -> Console:
    """Return a console that prints to stderr."""
    from rich.console import Console  # noqa: PLC0415

    return Console(stderr=True)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.ERROR,
    *,
    console: Console | None = None,
) -> Never:
    """Report `message` as an error and terminate the run.

    The message is printed after a red ``Error:`` prefix, unwrapped and with
    any Rich markup escaped, so paths and template text appear verbatim.

    Args:
        message: Text to report.
        code: Exit status for the process.
        console: Console to print to. Defaults to a stderr console.

    Raises:
        SystemExit: With `code`, always.
    """
    target = console if console is not None else get_error_console()
    target.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)
    raise SystemExit(code)

import io
from collections.abc import Callable

import pytest
from rich.console import Console

from render.cli import create_app


@pytest.fixture
def render_cli(
    console: Console, error_console: Console, tty_stdin: io.StringIO
) -> Callable[..., int]:
    """Create a CLI runner that returns the exit code.

    The runner takes the CLI arguments and an optional ``stdin`` keyword
    holding piped template text. Without it, stdin behaves like an
    interactive terminal.
    """

    def _run(*args: str, stdin: str | None = None) -> int:
        """Run CLI app and return exit code (0 if no SystemExit)."""
        stream = tty_stdin if stdin is None else io.StringIO(stdin)
        app = create_app(console=console, error_console=error_console, stdin=stream)

        try:
            app(args)
        except SystemExit as e:
            if e.code is None:
                return 0
            return e.code if isinstance(e.code, int) else 1
        else:
            return 0

    return _run

"""Shared test fixtures for render tests."""

import io

import pytest
from rich.console import Console


class TTYStream(io.StringIO):
    """Standard input stand-in that reports an interactive terminal."""

    def isatty(self) -> bool:
        return True


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )


@pytest.fixture
def error_console() -> Console:
    return Console(
        stderr=True,
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )


@pytest.fixture
def tty_stdin() -> io.StringIO:
    return TTYStream()


"""The render command-line interface."""

from ._app import DESCRIPTION, NAME, VERSION, app, create_app, main
from ._io import NO_INPUT_MESSAGE, STDIN_LABEL
from ._shared import ExitCode

__all__ = [
    "DESCRIPTION",
    "NAME",
    "NO_INPUT_MESSAGE",
    "STDIN_LABEL",
    "VERSION",
    "ExitCode",
    "app",
    "create_app",
    "main",
]

"""Shared utilities for render."""

from ._logging import LogFormatType, create_cli_logger

__all__ = ["LogFormatType", "create_cli_logger"]

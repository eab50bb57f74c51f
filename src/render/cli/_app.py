"""The command-line interface for render."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

import sys
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, TextIO

from cyclopts import App, Parameter
from rich.console import Console

from render.context import build_context, load_config_files
from render.engine import evaluate, format_error
from render.exceptions import RenderError
from render.settings import RenderSettings
from render.utils import create_cli_logger

from ._io import (
    RenderedOutput,
    TemplateSource,
    UsageError,
    collect_sources,
    write_outputs,
)
from ._shared import ExitCode, exit_with_error

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

NAME = "render"
DESCRIPTION = "Universal file renderer for templates and YAML configuration"
VERSION = "0.1.0"


def _render_sources(
    sources: list[TemplateSource],
    *,
    configs: list[Path],
    variables: list[str],
    settings: RenderSettings,
    logger: "FilteringBoundLogger",  # noqa: UP037
) -> list[RenderedOutput]:
    """Render every source before any output is written.

    Each source gets its own context, built from the same inputs, so no
    render can observe another's state.
    """
    config = load_config_files(configs)
    logger.debug("config_loaded", files=[str(p) for p in configs], keys=sorted(config))

    outputs: list[RenderedOutput] = []
    for source in sources:
        context = build_context(config, variables)
        logger.debug("context_built", source=source.label, keys=sorted(context))
        text = evaluate(
            source.text,
            context,
            strict=settings.strict,
            label=source.label,
            max_depth=settings.max_depth,
        )
        logger.debug("template_rendered", source=source.label, length=len(text))
        outputs.append(RenderedOutput(source, text))
    return outputs


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    stdin: TextIO | None = None,
    exit_on_error: bool = True,
) -> App:
    """Create the render CLI application.

    Args:
        console: Console receiving rendered output.
        error_console: Console receiving errors and usage messages.
        stdin: Stream templates are read from when no input option is given.
        exit_on_error: Exit on argument parsing errors instead of raising.

    Returns:
        The configured cyclopts App.
    """
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)

    app = App(
        name=NAME,
        help=DESCRIPTION,
        version=VERSION,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *,
        input_file: Annotated[
            Path | None, Parameter(name="--in", help="Template file to render")
        ] = None,
        output_file: Annotated[
            Path | None, Parameter(name="--out", help="Output file (default: stdout)")
        ] = None,
        indir: Annotated[
            Path | None,
            Parameter(name="--indir", help="Directory of templates to render"),
        ] = None,
        outdir: Annotated[
            Path | None,
            Parameter(name="--outdir", help="Directory for rendered --indir files"),
        ] = None,
        config: Annotated[
            list[Path] | None,
            Parameter(
                name="--config",
                help="YAML configuration file (can be repeated, later files win)",
            ),
        ] = None,
        var: Annotated[
            list[str] | None,
            Parameter(
                name="--var",
                help="Variable as key=value, dotted keys nest (can be repeated)",
            ),
        ] = None,
        unsafe_ignore_missing_keys: Annotated[
            bool,
            Parameter(
                name="--unsafe-ignore-missing-keys",
                negative="",
                help="Render missing keys as <no value> instead of failing",
            ),
        ] = False,
        debug: Annotated[
            bool,
            Parameter(name=["-d", "--debug"], negative="", help="Enable debug logging"),
        ] = False,
    ) -> None:
        """Render templates using YAML configuration and CLI variables.

        Templates are read from --in, every file below --indir, or stdin.
        Values from --config files are merged first, then --var entries in
        order, so variables always win over configuration.

        Exit codes:
            0: Success
            1: Any error; nothing is written
        """
        cli_overrides: dict[str, object] = {}
        if unsafe_ignore_missing_keys:
            cli_overrides["strict"] = False
        if debug:
            cli_overrides["debug"] = True

        try:
            settings = RenderSettings.load(cli_overrides)
        except RenderError as e:
            exit_with_error(format_error(e), ExitCode.ERROR, console=error_console)

        logger = create_cli_logger(
            level=settings.effective_log_level.value,
            log_format=settings.log_format.value,
            log_file=settings.log_file,
        )

        try:
            sources = collect_sources(
                input_file=input_file,
                output_file=output_file,
                indir=indir,
                outdir=outdir,
                stdin=stdin if stdin is not None else sys.stdin,
            )
            outputs = _render_sources(
                sources,
                configs=config or [],
                variables=var or [],
                settings=settings,
                logger=logger,
            )
        except (RenderError, UsageError, OSError) as e:
            message = format_error(e) if isinstance(e, RenderError) else str(e)
            logger.debug("render_failed", error=message, error_type=type(e).__name__)
            exit_with_error(message, ExitCode.ERROR, console=error_console)

        try:
            written = write_outputs(outputs, console.file)
        except OSError as e:
            exit_with_error(str(e), ExitCode.ERROR, console=error_console)
        for path in written:
            logger.debug("output_written", path=str(path))

    return app


app = create_app()


def main() -> None:
    """Default entrypoint for the `render` CLI."""
    app()

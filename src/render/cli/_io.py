"""Template input discovery and output writing for the render command."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from render.exceptions import TemplateLoadError

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path
    from typing import TextIO

STDIN_LABEL = "stdin"
"""Source label for templates read from standard input."""

TEMPLATE_SUFFIX = ".tmpl"
"""Suffix dropped from file names when rendering into an output directory."""

NO_INPUT_MESSAGE = "expected either stdin, --indir or --in parameter, for usage use --help"


class UsageError(Exception):
    """Raised when the combination of input and output options is invalid."""


@dataclass(frozen=True, slots=True)
class TemplateSource:
    """A template to render and where its output goes.

    Attributes:
        label: Name used in error positions (file path or ``stdin``).
        text: Template text.
        destination: Output file, or None to write to stdout.
    """

    label: str
    text: str
    destination: Path | None = None


@dataclass(frozen=True, slots=True)
class RenderedOutput:
    """Rendered text paired with its destination."""

    source: TemplateSource
    text: str


def read_stdin(stdin: TextIO) -> str | None:
    """Read template text from stdin.

    Args:
        stdin: The standard input stream.

    Returns:
        The text, or None if stdin is a TTY.
    """
    if stdin.isatty():
        return None
    return stdin.read()


def output_path_for(path: Path, indir: Path, outdir: Path) -> Path:
    """Map an input file to its output path, dropping a ``.tmpl`` suffix.

    Example:
        ``indir/sub/app.yaml.tmpl`` -> ``outdir/sub/app.yaml``
    """
    relative = path.relative_to(indir)
    if relative.name.endswith(TEMPLATE_SUFFIX) and relative.name != TEMPLATE_SUFFIX:
        relative = relative.with_name(relative.name.removesuffix(TEMPLATE_SUFFIX))
    return outdir / relative


def read_template(path: Path) -> str:
    """Read a template file as UTF-8 text.

    Raises:
        TemplateLoadError: If the file is not valid UTF-8.
    """
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        msg = f"template is not valid UTF-8 text: {e.reason} at byte {e.start}"
        raise TemplateLoadError(msg, path=path) from e


def discover_directory(indir: Path) -> list[Path]:
    """Return all files below `indir`, recursively, in sorted order."""
    return sorted(path for path in indir.rglob("*") if path.is_file())


def collect_sources(
    *,
    input_file: Path | None,
    output_file: Path | None,
    indir: Path | None,
    outdir: Path | None,
    stdin: TextIO,
) -> list[TemplateSource]:
    """Resolve the templates to render from the CLI options.

    Exactly one of `input_file`, `indir`, or a non-TTY stdin supplies the
    templates, in that order of preference.

    Raises:
        UsageError: If options conflict or no input is available.
        FileNotFoundError: If an input file does not exist.
        NotADirectoryError: If `indir` is not a directory.
        TemplateLoadError: If a template file is not UTF-8 text.
    """
    if input_file is not None and indir is not None:
        msg = "--in and --indir cannot be used together"
        raise UsageError(msg)
    if indir is not None and output_file is not None:
        msg = "--out cannot be used with --indir, use --outdir"
        raise UsageError(msg)
    if outdir is not None and indir is None:
        msg = "--outdir requires --indir"
        raise UsageError(msg)

    if input_file is not None:
        text = read_template(input_file)
        return [TemplateSource(str(input_file), text, output_file)]

    if indir is not None:
        if not indir.is_dir():
            msg = f"not a directory: '{indir}'"
            raise NotADirectoryError(msg)
        return [
            TemplateSource(
                str(path),
                read_template(path),
                output_path_for(path, indir, outdir) if outdir is not None else None,
            )
            for path in discover_directory(indir)
        ]

    text = read_stdin(stdin)
    if text is None:
        raise UsageError(NO_INPUT_MESSAGE)
    return [TemplateSource(STDIN_LABEL, text, output_file)]


def write_outputs(outputs: Iterable[RenderedOutput], stdout: TextIO) -> list[Path]:
    """Write rendered text to files or stdout, verbatim.

    Args:
        outputs: Rendered templates, in order.
        stdout: Stream for outputs without a destination file.

    Returns:
        The files written.
    """
    written: list[Path] = []
    for output in outputs:
        destination = output.source.destination
        if destination is None:
            _ = stdout.write(output.text)
            continue
        destination.parent.mkdir(parents=True, exist_ok=True)
        _ = destination.write_text(output.text, encoding="utf-8")
        written.append(destination)
    stdout.flush()
    return written

#!/usr/bin/env python3
"""
asciidoc_testsupport.cli.cli

Typer-based CLI for maintaining AsciiDoc conversion fixtures.

The ``render`` command runs the same conversion the test extension runs, so
its output can be reviewed and saved as an expected HTML fixture.

Examples
--------
Render a fixture with the default backend:

    asciidoc-testsupport render tests/CodeBlockTests_test_title.adoc

Print the fixture names a test method expects:

    asciidoc-testsupport fixture-names CodeBlockTests test_title --parameter expected
"""

from __future__ import annotations

import shutil
import sys
import tempfile
import traceback
from pathlib import Path

import typer

from asciidoc_testsupport.adapters.asciidoctor import AsciidoctorCliConverter
from asciidoc_testsupport.errors import TestSupportError
from asciidoc_testsupport.fixtures import asciidoc_filename, expected_html_filename
from asciidoc_testsupport.settings import ExtensionSettings, parse_attributes

app = typer.Typer(
    name="asciidoc-testsupport",
    help="Render and name AsciiDoc conversion test fixtures.",
    no_args_is_help=True,
)


def _print_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly error.

    Parameters
    ----------
    exc : Exception
        Exception raised by the command.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(f"✗ {type(exc).__name__}: {exc}", err=True)
    stderr = getattr(exc, "stderr", "")
    if stderr:
        typer.echo(stderr.rstrip(), err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


@app.command("render")
def render_cmd(
    source: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="AsciiDoc fixture to convert.",
    ),
    output_dir: Path | None = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory for the generated HTML. Defaults to a new temporary directory.",
    ),
    backend: str = typer.Option("spring-html", "--backend", "-b", help="Converter backend."),
    command: str = typer.Option(
        "asciidoctor", "--command", help="Converter executable and leading arguments."
    ),
    requires: list[str] | None = typer.Option(
        None, "--require", "-r", help="Library to load before converting (repeatable)."
    ),
    attributes: list[str] | None = typer.Option(
        None, "--attribute", "-a", help="Document attribute KEY=VALUE (repeatable)."
    ),
    debug: bool = typer.Option(False, "--debug", help="Show tracebacks on failure."),
) -> None:
    """Convert a fixture the way the test extension does and print the output path."""
    try:
        parsed_attributes = parse_attributes(attributes or [])
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    try:
        settings = ExtensionSettings.validated(
            command=tuple(command.split()),
            backend=backend,
            requires=tuple(requires or ()),
            attributes=parsed_attributes,
        )
        target = output_dir or Path(tempfile.mkdtemp(prefix=settings.temp_prefix))
        target.mkdir(parents=True, exist_ok=True)
        staged = target / source.name
        if staged.resolve() != source.resolve():
            shutil.copyfile(source, staged)
        converter = AsciidoctorCliConverter(settings.command)
        output = converter.convert_file(staged, settings.conversion_options(target))
    except (TestSupportError, OSError) as exc:
        raise typer.Exit(code=_print_error(exc, debug)) from exc

    typer.echo(str(output))


@app.command("fixture-names")
def fixture_names_cmd(
    owner: str = typer.Argument(..., help="Test class name, or module name for functions."),
    method: str = typer.Argument(..., help="Test method name."),
    parameters: list[str] | None = typer.Option(
        None, "--parameter", "-p", help="ExpectedHtml parameter name (repeatable)."
    ),
) -> None:
    """Print the fixture filenames the naming convention expects."""
    typer.echo(asciidoc_filename(owner, method))
    for parameter in parameters or []:
        typer.echo(expected_html_filename(owner, method, parameter))


@app.command("doctor")
def doctor_cmd(
    command: str = typer.Option(
        "asciidoctor", "--command", help="Converter executable to look up."
    ),
) -> None:
    """Print installed toolchain versions and converter availability."""
    import importlib.metadata as metadata

    typer.echo(f"Python: {sys.version.split()[0]}")
    for module in ("pytest", "pydantic", "typer"):
        try:
            typer.echo(f"{module}: {metadata.version(module)}")
        except metadata.PackageNotFoundError:
            typer.echo(f"{module}: <not installed>")

    executable = command.split()[0] if command.strip() else "asciidoctor"
    location = shutil.which(executable)
    typer.echo(f"{executable}: {location or '<not found on PATH>'}")


if __name__ == "__main__":
    app()

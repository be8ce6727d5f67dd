"""Asciidoctor command-line converter adapter."""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Sequence
from functools import cache
from pathlib import Path

from asciidoc_testsupport.application.options import ConversionOptions
from asciidoc_testsupport.errors import ConversionError, ConverterUnavailableError

logger = logging.getLogger(__name__)

OUTPUT_SUFFIX = ".html"


class AsciidoctorCliConverter:
    """Convert AsciiDoc files by running the ``asciidoctor`` executable.

    Parameters
    ----------
    command : Sequence[str], default=("asciidoctor",)
        Executable and leading arguments, e.g. ``("bundle", "exec", "asciidoctor")``.

    Notes
    -----
    Instances hold no per-call state and can be shared across tests.
    """

    def __init__(self, command: Sequence[str] = ("asciidoctor",)) -> None:
        if not command:
            raise ValueError("command must name the converter executable.")
        self.command = tuple(command)

    def build_command(self, source: Path, options: ConversionOptions) -> list[str]:
        """Return the argument vector for converting ``source``."""
        args = [
            *self.command,
            "--safe-mode",
            options.safe_mode,
            "--backend",
            options.backend,
            "--destination-dir",
            str(options.to_dir),
        ]
        for library in options.requires:
            args.extend(["--require", library])
        for name, value in options.attributes.items():
            args.extend(["--attribute", f"{name}={value}" if value else name])
        args.append(str(source))
        return args

    def convert_file(self, source: Path, options: ConversionOptions) -> Path:
        """Convert ``source`` into ``options.to_dir``.

        Parameters
        ----------
        source : Path
            AsciiDoc input file.
        options : ConversionOptions
            Safe mode, backend and destination for this call.

        Returns
        -------
        Path
            Path of the generated HTML file.

        Raises
        ------
        ConverterUnavailableError
            If the executable cannot be started.
        ConversionError
            If the converter exits with a non-zero status.
        """
        args = self.build_command(source, options)
        logger.debug("running converter: %s", shlex.join(args))
        try:
            completed = subprocess.run(
                args,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise ConverterUnavailableError(
                f"Unable to run converter '{self.command[0]}': {exc}"
            ) from exc
        if completed.returncode != 0:
            raise ConversionError(
                f"Converter exited with status {completed.returncode} for {source.name}: "
                f"{completed.stderr.strip()}",
                returncode=completed.returncode,
                stderr=completed.stderr,
            )
        if completed.stderr:
            logger.debug("converter diagnostics for %s: %s", source.name, completed.stderr.strip())
        return options.to_dir / f"{source.stem}{OUTPUT_SUFFIX}"


@cache
def default_converter(command: tuple[str, ...] = ("asciidoctor",)) -> AsciidoctorCliConverter:
    """Return the shared converter instance for ``command``."""
    return AsciidoctorCliConverter(command)

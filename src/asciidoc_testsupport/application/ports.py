"""Application ports for the converter and parameter resolvers."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from asciidoc_testsupport.application.options import ConversionOptions

if TYPE_CHECKING:
    from asciidoc_testsupport.context import ExtensionContext
    from asciidoc_testsupport.resolvers.base import ParameterContext


class Converter(Protocol):
    """Convert an AsciiDoc file into the configured output format."""

    def convert_file(self, source: Path, options: ConversionOptions) -> Path:
        """Convert ``source`` into ``options.to_dir`` and return the output path."""


@runtime_checkable
class ParameterResolver(Protocol):
    """Supply arguments for test parameters it recognizes."""

    def supports_parameter(self, parameter: ParameterContext) -> bool:
        """Return ``True`` if this resolver can supply ``parameter``."""

    def resolve_parameter(
        self,
        parameter: ParameterContext,
        context: ExtensionContext,
    ) -> Any:
        """Return the argument value for ``parameter``."""

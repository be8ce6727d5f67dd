"""Resolver supplying converted and expected HTML to test parameters."""

from __future__ import annotations

import logging
import shutil
from typing import Any

from asciidoc_testsupport.adapters.asciidoctor import default_converter
from asciidoc_testsupport.application.ports import Converter
from asciidoc_testsupport.context import ExtensionContext
from asciidoc_testsupport.errors import ParameterResolutionError
from asciidoc_testsupport.fixtures import (
    asciidoc_filename,
    expected_html_filename,
    find_fixture,
    read_fixture_text,
)
from asciidoc_testsupport.resolvers.base import ParameterContext
from asciidoc_testsupport.settings import ExtensionSettings
from asciidoc_testsupport.temp import Temp
from asciidoc_testsupport.types import ConvertedHtml, ExpectedHtml, Source

logger = logging.getLogger(__name__)

CONVERTED_NAME = "test"


class AsciidoctorExtension:
    """Resolve ``ConvertedHtml`` and ``ExpectedHtml`` test parameters.

    Parameters
    ----------
    converter : Converter | None, default=None
        Converter to run. Defaults to the shared ``asciidoctor`` command-line
        converter built from the active settings.
    settings : ExtensionSettings | None, default=None
        Explicit settings. When omitted, settings come from the running
        pytest configuration, falling back to the defaults.

    Examples
    --------
    >>> @extend_with(AsciidoctorExtension())
    ... class CodeBlockTests:
    ...     def test_title(self, html: ConvertedHtml, expected: ExpectedHtml) -> None:
    ...         assert html.read_text() == expected
    """

    def __init__(
        self,
        converter: Converter | None = None,
        settings: ExtensionSettings | None = None,
    ) -> None:
        self._converter = converter
        self._settings = settings

    def supports_parameter(self, parameter: ParameterContext) -> bool:
        return parameter.is_assignable_to(ConvertedHtml) or parameter.is_assignable_to(
            ExpectedHtml
        )

    def resolve_parameter(self, parameter: ParameterContext, context: ExtensionContext) -> Any:
        """Resolve ``parameter`` for the invocation described by ``context``."""
        if parameter.is_assignable_to(ConvertedHtml):
            return self._resolve_converted_html(parameter, context)
        if parameter.is_assignable_to(ExpectedHtml):
            return self._resolve_expected_html(parameter, context)
        return None

    def settings_for(self, context: ExtensionContext) -> ExtensionSettings:
        """Return explicit settings or load them from the context's pytest config."""
        if self._settings is not None:
            return self._settings
        return ExtensionSettings.from_pytest_config(context.config)

    def converter_for(self, settings: ExtensionSettings) -> Converter:
        if self._converter is not None:
            return self._converter
        return default_converter(settings.command)

    def _resolve_converted_html(
        self, parameter: ParameterContext, context: ExtensionContext
    ) -> ConvertedHtml:
        source_override = parameter.find_annotation(Source)
        filename = (
            source_override.value
            if source_override is not None
            else asciidoc_filename(context.owner_name, context.method_name)
        )
        try:
            settings = self.settings_for(context)
            temp = Temp.get(context, settings.temp_prefix)
            source = temp.path / f"{CONVERTED_NAME}.adoc"
            fixture = find_fixture(context.fixture_root, filename, context.owner_name).require()
            shutil.copyfile(fixture, source)
            logger.debug("converting %s for %r", filename, context)
            self.converter_for(settings).convert_file(
                source, settings.conversion_options(temp.path)
            )
            return ConvertedHtml(temp.path, temp.path / f"{CONVERTED_NAME}.html")
        except Exception as exc:
            raise ParameterResolutionError(
                f"Error converting asciidoc {filename}", filename=filename
            ) from exc

    def _resolve_expected_html(
        self, parameter: ParameterContext, context: ExtensionContext
    ) -> ExpectedHtml:
        filename = expected_html_filename(context.owner_name, context.method_name, parameter.name)
        try:
            settings = self.settings_for(context)
            fixture = find_fixture(context.fixture_root, filename, context.owner_name).require()
            return ExpectedHtml(read_fixture_text(fixture, settings.encoding))
        except Exception as exc:
            raise ParameterResolutionError(
                f"Error reading expected HTML file {filename}", filename=filename
            ) from exc

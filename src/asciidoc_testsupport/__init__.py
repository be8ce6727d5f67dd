"""Parameter resolution for AsciiDoc-to-HTML conversion tests.

Decorate a test class (or function) with
``extend_with(AsciidoctorExtension())`` and declare parameters typed as
``ConvertedHtml`` or ``ExpectedHtml``. For class ``C`` and method ``m`` the
extension converts ``C_m.adoc`` and loads ``C_m_<parameter>.html`` from the
directory holding the test module.
"""

from __future__ import annotations

from asciidoc_testsupport.context import ExtensionContext, Namespace
from asciidoc_testsupport.errors import (
    ConversionError,
    ConverterUnavailableError,
    ExtensionConfigurationError,
    FixtureNotFoundError,
    ParameterResolutionError,
)
from asciidoc_testsupport.extension import extend_with
from asciidoc_testsupport.resolvers import (
    AsciidoctorExtension,
    ParameterContext,
    ParameterResolverRegistry,
)
from asciidoc_testsupport.settings import ExtensionSettings
from asciidoc_testsupport.temp import Temp
from asciidoc_testsupport.types import ConvertedHtml, ExpectedHtml, Source

__version__ = "0.1.0"

__all__ = [
    "AsciidoctorExtension",
    "ConversionError",
    "ConvertedHtml",
    "ConverterUnavailableError",
    "ExpectedHtml",
    "ExtensionConfigurationError",
    "ExtensionContext",
    "ExtensionSettings",
    "FixtureNotFoundError",
    "Namespace",
    "ParameterContext",
    "ParameterResolutionError",
    "ParameterResolverRegistry",
    "Source",
    "Temp",
    "extend_with",
]

"""Application-layer ports and option objects."""

from asciidoc_testsupport.application.options import ConversionOptions
from asciidoc_testsupport.application.ports import Converter, ParameterResolver

__all__ = ["ConversionOptions", "Converter", "ParameterResolver"]

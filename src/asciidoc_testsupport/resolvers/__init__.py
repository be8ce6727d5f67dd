"""Parameter resolvers and their registry."""

from .asciidoctor import AsciidoctorExtension
from .base import ParameterContext
from .registry import ParameterResolverRegistry

__all__ = ["AsciidoctorExtension", "ParameterContext", "ParameterResolverRegistry"]

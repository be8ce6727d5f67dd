"""Converter adapters implementing application ports."""

from asciidoc_testsupport.adapters.asciidoctor import (
    AsciidoctorCliConverter,
    default_converter,
)

__all__ = ["AsciidoctorCliConverter", "default_converter"]

"""Parameter types recognized by the asciidoctor extension."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

type SafeMode = Literal["unsafe", "safe", "server", "secure"]


@dataclass(frozen=True)
class ConvertedHtml:
    """HTML produced by converting an AsciiDoc fixture.

    Parameters
    ----------
    directory : Path
        Scoped temporary directory the conversion wrote into. It is deleted
        when the owning test invocation finishes.
    file : Path
        Generated HTML file inside ``directory``.
    """

    directory: Path
    file: Path

    def read_text(self, encoding: str = "utf-8") -> str:
        """Return the generated HTML without newline translation."""
        return self.file.read_bytes().decode(encoding)


class ExpectedHtml(str):
    """Reference HTML loaded verbatim from a fixture file."""

    __slots__ = ()


@dataclass(frozen=True)
class Source:
    """Name the AsciiDoc fixture to convert for a ``ConvertedHtml`` parameter.

    Used as ``Annotated[ConvertedHtml, Source("other.adoc")]`` to override
    the ``<Class>_<method>.adoc`` naming convention.
    """

    value: str

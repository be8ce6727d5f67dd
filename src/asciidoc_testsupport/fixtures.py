"""Fixture naming convention and resource lookup."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from asciidoc_testsupport.errors import FixtureNotFoundError

ASCIIDOC_SUFFIX = ".adoc"
HTML_SUFFIX = ".html"


def fixture_filename(owner_name: str, method_name: str, suffix: str) -> str:
    """Return ``<owner>_<method><suffix>``."""
    return f"{owner_name}_{method_name}{suffix}"


def asciidoc_filename(owner_name: str, method_name: str) -> str:
    """Return the default AsciiDoc input fixture name for a test."""
    return fixture_filename(owner_name, method_name, ASCIIDOC_SUFFIX)


def expected_html_filename(owner_name: str, method_name: str, parameter_name: str) -> str:
    """Return the expected HTML fixture name for one test parameter."""
    return fixture_filename(owner_name, method_name, f"_{parameter_name}{HTML_SUFFIX}")


@dataclass(frozen=True)
class FoundFixture:
    """Fixture that exists on disk."""

    path: Path

    def require(self) -> Path:
        return self.path


@dataclass(frozen=True)
class MissingFixture:
    """Fixture that could not be found, with the context needed to report it."""

    owner: str
    filename: str
    root: Path

    def require(self) -> Path:
        """Fail with an assertion naming the owner and filename."""
        raise FixtureNotFoundError(self.owner, self.filename)


type FixtureLookup = FoundFixture | MissingFixture


def find_fixture(root: Path, filename: str, owner: str) -> FixtureLookup:
    """Look up ``filename`` relative to ``root``.

    Parameters
    ----------
    root : Path
        Directory the fixture is colocated in.
    filename : str
        Fixture name, possibly containing subdirectories.
    owner : str
        Test class or module name, used when reporting a missing fixture.

    Returns
    -------
    FoundFixture | MissingFixture
        Explicit lookup outcome.
    """
    candidate = root / filename
    if candidate.is_file():
        return FoundFixture(candidate)
    return MissingFixture(owner=owner, filename=filename, root=root)


def read_fixture_text(path: Path, encoding: str = "utf-8") -> str:
    """Return the fixture's content exactly as stored."""
    return path.read_bytes().decode(encoding)

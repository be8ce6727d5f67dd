"""Unit tests for fixture naming and lookup."""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from asciidoc_testsupport.errors import FixtureNotFoundError
from asciidoc_testsupport.fixtures import (
    FoundFixture,
    MissingFixture,
    asciidoc_filename,
    expected_html_filename,
    find_fixture,
    read_fixture_text,
)


def test_asciidoc_filename_uses_owner_and_method() -> None:
    """Build the default input fixture name."""
    assert asciidoc_filename("CodeBlockTests", "test_title") == "CodeBlockTests_test_title.adoc"


def test_expected_html_filename_includes_parameter() -> None:
    """Append the parameter name before the HTML suffix."""
    assert (
        expected_html_filename("CodeBlockTests", "test_title", "expected")
        == "CodeBlockTests_test_title_expected.html"
    )


def test_find_fixture_returns_found(tmp_path: Path) -> None:
    """Return the fixture path when the file exists."""
    fixture = tmp_path / "A_test_x.adoc"
    fixture.write_text("= Title\n", encoding="utf-8")

    result = find_fixture(tmp_path, "A_test_x.adoc", "A")

    assert result == FoundFixture(fixture)
    assert result.require() == fixture


def test_find_fixture_reports_missing_with_context(tmp_path: Path) -> None:
    """Fail with an assertion naming owner and filename."""
    result = find_fixture(tmp_path, "A_test_x.adoc", "A")

    assert isinstance(result, MissingFixture)
    with pytest.raises(FixtureNotFoundError, match="A A_test_x.adoc") as excinfo:
        result.require()
    assert isinstance(excinfo.value, AssertionError)
    assert excinfo.value.filename == "A_test_x.adoc"


def test_find_fixture_ignores_directories(tmp_path: Path) -> None:
    """Treat a directory with the fixture name as missing."""
    (tmp_path / "A_test_x.adoc").mkdir()

    assert isinstance(find_fixture(tmp_path, "A_test_x.adoc", "A"), MissingFixture)


def test_read_fixture_text_keeps_line_endings(tmp_path: Path) -> None:
    """Return content without newline translation or trimming."""
    fixture = tmp_path / "expected.html"
    fixture.write_bytes(b"  <p>one</p>\r\n<p>two</p>\r\n\n")

    assert read_fixture_text(fixture) == "  <p>one</p>\r\n<p>two</p>\r\n\n"


@settings(max_examples=50, deadline=None)
@given(st.text(alphabet=st.characters(exclude_categories=("Cs",))))
def test_read_fixture_text_is_identity(content: str) -> None:
    """Read back exactly the text written to a fixture."""
    with tempfile.TemporaryDirectory() as directory:
        fixture = Path(directory) / "expected.html"
        fixture.write_bytes(content.encode("utf-8"))

        assert read_fixture_text(fixture) == content

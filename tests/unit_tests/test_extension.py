"""Unit tests for the ``extend_with`` decorator."""

from __future__ import annotations

import inspect
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import TYPE_CHECKING, Any

import pytest

from asciidoc_testsupport.application.options import ConversionOptions
from asciidoc_testsupport.errors import ParameterResolutionError
from asciidoc_testsupport.extension import extend_with
from asciidoc_testsupport.resolvers.asciidoctor import AsciidoctorExtension
from asciidoc_testsupport.settings import ExtensionSettings
from asciidoc_testsupport.types import ConvertedHtml, ExpectedHtml

if TYPE_CHECKING:
    from _pytest.fixtures import FixtureRequest

FIXTURES = Path(__file__).resolve().parent


class _Converter:
    def convert_file(self, source: Path, options: ConversionOptions) -> Path:
        output = options.to_dir / f"{source.stem}.html"
        output.write_text("<p>converted</p>\n", encoding="utf-8")
        return output


def _extension() -> AsciidoctorExtension:
    return AsciidoctorExtension(converter=_Converter(), settings=ExtensionSettings())


def _request(cls: type | None = None) -> Any:
    return SimpleNamespace(cls=cls, module=sys.modules[__name__], config=None)


@extend_with(_extension())
class DecoratedSuite:
    seen: list[ConvertedHtml] = []

    def test_convert(self, html: ConvertedHtml, tmp_path: Path) -> str:
        assert html.file.is_file()
        self.seen.append(html)
        return str(tmp_path)

    def test_fails(self, html: ConvertedHtml) -> None:
        self.seen.append(html)
        raise AssertionError("test body failed")

    def helper(self, html: ConvertedHtml) -> None:
        del html


def test_signature_hides_resolved_parameters() -> None:
    """Expose only pytest fixtures plus ``request``."""
    parameters = list(inspect.signature(DecoratedSuite.test_convert).parameters)

    assert parameters == ["self", "tmp_path", "request"]


def test_non_test_functions_are_left_alone() -> None:
    """Wrap only ``test*`` functions of a decorated class."""
    assert "html" in inspect.signature(DecoratedSuite.helper).parameters
    assert not hasattr(DecoratedSuite.helper, "__wrapped__")


def test_wrapper_resolves_and_cleans_up() -> None:
    """Supply converted HTML and delete its directory after the call."""
    DecoratedSuite.seen.clear()

    result = DecoratedSuite().test_convert(tmp_path="sentinel", request=_request(DecoratedSuite))

    assert result == "sentinel"
    (html,) = DecoratedSuite.seen
    assert html.file.name == "test.html"
    assert not html.directory.exists()


def test_wrapper_cleans_up_when_test_fails() -> None:
    """Release the directory when the test body raises."""
    DecoratedSuite.seen.clear()

    with pytest.raises(AssertionError, match="test body failed"):
        DecoratedSuite().test_fails(request=_request(DecoratedSuite))

    (html,) = DecoratedSuite.seen
    assert not html.directory.exists()


def test_invocations_are_isolated() -> None:
    """Create a new directory for every invocation."""
    DecoratedSuite.seen.clear()
    suite = DecoratedSuite()

    suite.test_convert(tmp_path="a", request=_request(DecoratedSuite))
    suite.test_convert(tmp_path="b", request=_request(DecoratedSuite))

    first, second = DecoratedSuite.seen
    assert first.directory != second.directory


def test_function_keeps_explicit_request() -> None:
    """Pass ``request`` through when the test asks for it."""

    def test_uses_request(request: Any, expected: ExpectedHtml) -> tuple[Any, str]:
        return request, expected

    wrapped = extend_with(_extension())(test_uses_request)

    assert list(inspect.signature(wrapped).parameters) == ["request"]
    request = _request()
    returned_request, expected = wrapped(request=request)
    assert returned_request is request
    assert expected == "<p>expected</p>\n"


def test_function_without_resolvable_parameters_is_unchanged() -> None:
    """Return functions that need no resolution as-is."""

    def test_plain(tmp_path: Path) -> None:
        del tmp_path

    assert extend_with(_extension())(test_plain) is test_plain


def test_missing_fixture_fails_invocation() -> None:
    """Fail the invocation naming the missing fixture."""

    def test_without_fixture(html: ConvertedHtml) -> None:
        del html

    wrapped = extend_with(_extension())(test_without_fixture)

    with pytest.raises(ParameterResolutionError, match="test_extension_test_without_fixture.adoc"):
        wrapped(request=_request())


def test_decorating_non_callable_fails() -> None:
    """Reject targets that are neither classes nor functions."""
    with pytest.raises(TypeError, match="cannot decorate"):
        extend_with(_extension())(42)


def test_type_checking_only_hint_does_not_disable_resolution() -> None:
    """Resolve parameters even when another annotation cannot be evaluated."""

    def test_with_unresolvable_hint(request: FixtureRequest, html: ConvertedHtml) -> str:
        del request
        return html.read_text()

    wrapped = extend_with(_extension())(test_with_unresolvable_hint)

    assert list(inspect.signature(wrapped).parameters) == ["request"]
    assert wrapped(request=_request()) == "<p>converted</p>\n"


def test_asynchronous_tests_are_rejected() -> None:
    """Refuse coroutine tests, whose body would run after cleanup."""

    async def test_async(html: ConvertedHtml) -> None:
        del html

    with pytest.raises(TypeError, match="asynchronous"):
        extend_with(_extension())(test_async)

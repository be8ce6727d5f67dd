"""Exception taxonomy for parameter resolution and conversion failures."""

from __future__ import annotations


class TestSupportError(RuntimeError):
    """Base class for errors raised by the test-support extension."""

    __test__ = False
    exit_code = 1


class ParameterResolutionError(TestSupportError):
    """Raised when a test parameter cannot be supplied.

    Parameters
    ----------
    message : str
        Human-readable description naming the fixture involved.
    filename : str | None, default=None
        Fixture filename the resolution was working on.
    """

    def __init__(self, message: str, *, filename: str | None = None) -> None:
        super().__init__(message)
        self.filename = filename


class ExtensionConfigurationError(TestSupportError):
    """Raised when the extension cannot be set up for a test invocation."""


class ConversionError(TestSupportError):
    """Raised when the external converter reports a failure."""

    def __init__(
        self,
        message: str,
        *,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class ConverterUnavailableError(ConversionError):
    """Raised when the converter executable cannot be started."""

    exit_code = 2


class FixtureNotFoundError(AssertionError):
    """Raised when a requested fixture resource does not exist."""

    def __init__(self, owner: str, filename: str) -> None:
        super().__init__(f"{owner} {filename}: fixture resource does not exist")
        self.owner = owner
        self.filename = filename

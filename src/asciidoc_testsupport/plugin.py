"""pytest plugin declaring asciidoc extension configuration."""

from __future__ import annotations

import pytest

from asciidoc_testsupport.settings import INI_OPTIONS, ExtensionSettings

_INI_HELP: dict[str, str] = {
    "command": "Converter executable and leading arguments (default: asciidoctor).",
    "backend": "Converter backend used for fixture conversion (default: spring-html).",
    "safe_mode": "Converter safe mode: unsafe, safe, server or secure (default: unsafe).",
    "requires": "Libraries the converter loads before converting (one per line).",
    "attributes": "Document attributes as KEY=VALUE (one per line).",
    "temp_prefix": "Prefix of per-test output directories (default: pytestasciidoc).",
    "encoding": "Encoding of expected HTML fixtures (default: utf-8).",
}


def pytest_addoption(parser: pytest.Parser) -> None:
    """Declare ini options and command-line overrides."""
    for field_name, (ini_name, ini_type) in INI_OPTIONS.items():
        default: object = [] if ini_type in {"args", "linelist"} else ""
        parser.addini(ini_name, _INI_HELP[field_name], type=ini_type, default=default)

    group = parser.getgroup("asciidoc", "asciidoc fixture conversion")
    group.addoption(
        "--asciidoc-backend",
        dest="asciidoc_backend_override",
        default=None,
        help="Override the converter backend for this run.",
    )
    group.addoption(
        "--asciidoc-command",
        dest="asciidoc_command_override",
        default=None,
        help="Override the converter command for this run.",
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register the ``asciidoc`` marker."""
    config.addinivalue_line(
        "markers",
        "asciidoc: test converts AsciiDoc fixtures with the external converter.",
    )


@pytest.fixture(scope="session")
def asciidoc_settings(pytestconfig: pytest.Config) -> ExtensionSettings:
    """Validated asciidoc extension settings for this session."""
    return ExtensionSettings.from_pytest_config(pytestconfig)

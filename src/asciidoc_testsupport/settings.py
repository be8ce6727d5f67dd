"""Pydantic settings for the asciidoctor extension."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pytest
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from asciidoc_testsupport.application.options import ConversionOptions
from asciidoc_testsupport.errors import ExtensionConfigurationError
from asciidoc_testsupport.types import SafeMode

INI_OPTIONS: dict[str, tuple[str, str]] = {
    "command": ("asciidoc_command", "args"),
    "backend": ("asciidoc_backend", "string"),
    "safe_mode": ("asciidoc_safe_mode", "string"),
    "requires": ("asciidoc_requires", "linelist"),
    "attributes": ("asciidoc_attributes", "linelist"),
    "temp_prefix": ("asciidoc_temp_prefix", "string"),
    "encoding": ("asciidoc_encoding", "string"),
}
CLI_OPTIONS: dict[str, str] = {
    "command": "asciidoc_command_override",
    "backend": "asciidoc_backend_override",
}


class ExtensionSettings(BaseModel):
    """Validated configuration for fixture conversion."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    command: tuple[str, ...] = ("asciidoctor",)
    backend: str = "spring-html"
    safe_mode: SafeMode = "unsafe"
    requires: tuple[str, ...] = ()
    attributes: dict[str, str] = Field(default_factory=dict)
    temp_prefix: str = "pytestasciidoc"
    encoding: str = "utf-8"

    @field_validator("command")
    @classmethod
    def _validate_command(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value or not value[0].strip():
            raise ValueError("command must name the converter executable.")
        return value

    @field_validator("backend", "temp_prefix", "encoding")
    @classmethod
    def _validate_non_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("value cannot be empty.")
        return value.strip()

    @field_validator("attributes", mode="before")
    @classmethod
    def _parse_attributes(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return parse_attributes(value)
        return value

    def conversion_options(self, to_dir: Path) -> ConversionOptions:
        """Build converter options targeting ``to_dir``."""
        return ConversionOptions(
            to_dir=to_dir,
            safe_mode=self.safe_mode,
            backend=self.backend,
            requires=self.requires,
            attributes=dict(self.attributes),
        )

    @classmethod
    def from_pytest_config(cls, config: pytest.Config | None) -> ExtensionSettings:
        """Load settings from a pytest session's ini file and command line.

        Parameters
        ----------
        config : pytest.Config | None
            Running pytest configuration. ``None`` yields the defaults.

        Returns
        -------
        ExtensionSettings
            Validated settings.

        Raises
        ------
        ExtensionConfigurationError
            If configured values fail validation.
        """
        values: dict[str, Any] = {}
        if config is not None:
            for field_name, (ini_name, _) in INI_OPTIONS.items():
                value = _read_ini(config, ini_name)
                if value:
                    values[field_name] = value
            for field_name, dest in CLI_OPTIONS.items():
                value = config.getoption(dest, default=None)
                if value:
                    values[field_name] = value
        if isinstance(values.get("command"), str):
            values["command"] = tuple(values["command"].split())
        return cls.validated(**values)

    @classmethod
    def validated(cls, **values: Any) -> ExtensionSettings:
        """Validate ``values`` and raise the extension's configuration error."""
        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise ExtensionConfigurationError(
                f"Invalid asciidoc extension settings: {exc}"
            ) from exc


def parse_attributes(items: Iterable[str]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` entries; a bare ``KEY`` sets an empty value."""
    parsed: dict[str, str] = {}
    for item in items:
        key, _, value = item.partition("=")
        key = key.strip()
        if not key:
            raise ValueError(f"Invalid attribute entry '{item}'. Use KEY=VALUE format.")
        parsed[key] = value
    return parsed


def _read_ini(config: pytest.Config, name: str) -> Any:
    try:
        return config.getini(name)
    except ValueError:
        # Option was never declared: the plugin is not registered in this session.
        return None

"""Typed option objects passed to converter implementations."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from asciidoc_testsupport.types import SafeMode


@dataclass(frozen=True)
class ConversionOptions:
    """Per-call converter configuration."""

    to_dir: Path
    safe_mode: SafeMode = "unsafe"
    backend: str = "spring-html"
    requires: tuple[str, ...] = ()
    attributes: Mapping[str, str] = field(default_factory=dict)

"""Scoped temporary directory shared by one test invocation."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from asciidoc_testsupport.context import ExtensionContext, Namespace
from asciidoc_testsupport.errors import ExtensionConfigurationError

logger = logging.getLogger(__name__)

NAMESPACE = Namespace.create("asciidoc_testsupport")
STORE_KEY = "output.dir"
DEFAULT_PREFIX = "pytestasciidoc"


class Temp:
    """Temporary directory deleted when its extension context closes."""

    def __init__(self, prefix: str = DEFAULT_PREFIX) -> None:
        self._directory = Path(tempfile.mkdtemp(prefix=prefix))
        self._closed = False
        logger.debug("created output directory %s", self._directory)

    @property
    def path(self) -> Path:
        """Directory path."""
        return self._directory

    def close(self) -> None:
        """Delete the directory tree, deepest entries first.

        Raises
        ------
        OSError
            If any entry cannot be removed.
        """
        if self._closed:
            return
        self._closed = True
        if not self._directory.exists():
            return
        for entry in sorted(self._directory.rglob("*"), reverse=True):
            if entry.is_dir() and not entry.is_symlink():
                entry.rmdir()
            else:
                entry.unlink()
        self._directory.rmdir()
        logger.debug("deleted output directory %s", self._directory)

    def __repr__(self) -> str:
        return f"Temp({self._directory})"

    @classmethod
    def get(cls, context: ExtensionContext, prefix: str = DEFAULT_PREFIX) -> Temp:
        """Return the context's directory, creating it on first use."""
        store = context.get_store(NAMESPACE)
        return store.get_or_compute_if_absent(
            STORE_KEY, lambda key: cls.create(prefix), cls
        )

    @classmethod
    def create(cls, prefix: str = DEFAULT_PREFIX) -> Temp:
        """Create a directory, reporting failures as configuration errors."""
        try:
            return cls(prefix)
        except OSError as exc:
            raise ExtensionConfigurationError("Failed to create output directory") from exc

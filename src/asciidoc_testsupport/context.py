"""Per-invocation extension context with namespaced, closeable stores."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType, TracebackType
from typing import Any, Protocol, TypeVar, runtime_checkable

import pytest

logger = logging.getLogger(__name__)

T = TypeVar("T")


@runtime_checkable
class CloseableResource(Protocol):
    """Stored value released when its owning context closes."""

    def close(self) -> None:
        """Release the resource."""


@dataclass(frozen=True)
class Namespace:
    """Partition of an ``ExtensionContext`` store."""

    parts: tuple[object, ...]

    @classmethod
    def create(cls, *parts: object) -> Namespace:
        """Create a namespace from one or more owner objects."""
        if not parts:
            raise ValueError("namespace requires at least one part.")
        return cls(parts)


class Store:
    """Key/value store scoped to one extension context."""

    def __init__(self, on_create: Callable[[object], None]) -> None:
        self._values: dict[object, object] = {}
        self._on_create = on_create

    def get(self, key: object, required_type: type[T]) -> T | None:
        """Return the stored value for ``key`` or ``None``."""
        value = self._values.get(key)
        if value is None:
            return None
        return _checked(key, value, required_type)

    def get_or_compute_if_absent(
        self,
        key: object,
        factory: Callable[[object], T],
        required_type: type[T],
    ) -> T:
        """Return the value for ``key``, creating it with ``factory`` on first use.

        Parameters
        ----------
        key : object
            Store key.
        factory : Callable[[object], T]
            Called with ``key`` when no value exists yet.
        required_type : type
            Type the stored value must have.

        Returns
        -------
        T
            Memoized value.
        """
        if key not in self._values:
            value = factory(key)
            self._values[key] = value
            self._on_create(value)
        return _checked(key, self._values[key], required_type)


class ExtensionContext:
    """Context for a single test invocation.

    Parameters
    ----------
    owner : type | ModuleType
        Test class, or the module for module-level test functions.
    test_method : Callable[..., Any]
        Test function being invoked.
    fixture_root : Path | None, default=None
        Directory holding fixture resources. Defaults to the directory of
        the owner's source file.
    config : pytest.Config | None, default=None
        Running pytest configuration, when invoked by pytest.

    Notes
    -----
    Closing the context closes every stored ``CloseableResource`` in reverse
    creation order. Closing twice is a no-op.
    """

    def __init__(
        self,
        owner: type | ModuleType,
        test_method: Callable[..., Any],
        *,
        fixture_root: Path | None = None,
        config: pytest.Config | None = None,
    ) -> None:
        self.owner = owner
        self.test_method = test_method
        self.fixture_root = fixture_root or _source_directory(owner)
        self.config = config
        self._stores: dict[Namespace, Store] = {}
        self._resources: list[CloseableResource] = []
        self._closed = False

    @property
    def owner_name(self) -> str:
        """Simple name of the test class or module."""
        if isinstance(self.owner, ModuleType):
            return self.owner.__name__.rsplit(".", 1)[-1]
        return self.owner.__name__

    @property
    def method_name(self) -> str:
        """Name of the test function."""
        return self.test_method.__name__

    @property
    def closed(self) -> bool:
        """Whether ``close`` has run."""
        return self._closed

    def get_store(self, namespace: Namespace) -> Store:
        """Return the store for ``namespace``, creating it on first use."""
        if self._closed:
            raise RuntimeError("extension context is already closed.")
        store = self._stores.get(namespace)
        if store is None:
            store = Store(self._track)
            self._stores[namespace] = store
        return store

    def close(self) -> None:
        """Close stored resources, newest first.

        The first error raised by a resource propagates after the remaining
        resources have been closed.
        """
        if self._closed:
            return
        self._closed = True
        logger.debug("closing %r with %d resource(s)", self, len(self._resources))
        error: BaseException | None = None
        while self._resources:
            resource = self._resources.pop()
            try:
                resource.close()
            except Exception as exc:
                if error is None:
                    error = exc
                else:
                    error.add_note(f"also failed closing {resource!r}: {exc}")
        self._stores.clear()
        if error is not None:
            raise error

    def __enter__(self) -> ExtensionContext:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"ExtensionContext({self.owner_name}.{self.method_name})"

    def _track(self, value: object) -> None:
        if isinstance(value, CloseableResource):
            self._resources.append(value)


def _checked(key: object, value: object, required_type: type[T]) -> T:
    if not isinstance(value, required_type):
        raise TypeError(
            f"Stored value for key '{key}' is {type(value).__name__}, "
            f"expected {required_type.__name__}."
        )
    return value


def _source_directory(owner: type | ModuleType) -> Path:
    return Path(inspect.getfile(owner)).resolve().parent

"""Parameter descriptors handed to resolvers."""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Annotated, Any, TypeVar, get_args, get_origin

T = TypeVar("T")


@dataclass(frozen=True)
class ParameterContext:
    """Declared test parameter.

    Parameters
    ----------
    name : str
        Parameter name.
    index : int
        Position in the test signature.
    annotation : Any
        Declared type with any ``Annotated`` wrapper removed.
    metadata : tuple[Any, ...]
        ``Annotated`` metadata items, in declaration order.
    """

    name: str
    index: int
    annotation: Any
    metadata: tuple[Any, ...] = ()

    @classmethod
    def from_parameter(
        cls,
        parameter: inspect.Parameter,
        index: int,
        hint: Any = inspect.Parameter.empty,
    ) -> ParameterContext:
        """Describe ``parameter`` using its evaluated type ``hint`` when available."""
        declared = parameter.annotation if hint is inspect.Parameter.empty else hint
        metadata: tuple[Any, ...] = ()
        if get_origin(declared) is Annotated:
            declared, *extras = get_args(declared)
            metadata = tuple(extras)
        return cls(name=parameter.name, index=index, annotation=declared, metadata=metadata)

    @property
    def type(self) -> type | None:
        """Declared type when it is a class, else ``None``."""
        return self.annotation if isinstance(self.annotation, type) else None

    def is_assignable_to(self, kind: type) -> bool:
        """Whether the declared type is ``kind`` or a subclass of it."""
        declared = self.type
        return declared is not None and issubclass(declared, kind)

    def find_annotation(self, kind: type[T]) -> T | None:
        """Return the first metadata item of type ``kind``."""
        for item in self.metadata:
            if isinstance(item, kind):
                return item
        return None

"""Ordered registry of parameter resolvers."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from asciidoc_testsupport.application.ports import ParameterResolver
from asciidoc_testsupport.context import ExtensionContext
from asciidoc_testsupport.errors import ParameterResolutionError
from asciidoc_testsupport.resolvers.base import ParameterContext


class ParameterResolverRegistry:
    """Resolvers examined in registration order for each test parameter."""

    def __init__(self, resolvers: Iterable[ParameterResolver] = ()) -> None:
        self._resolvers: list[ParameterResolver] = []
        for resolver in resolvers:
            self.register(resolver)

    def register(self, resolver: ParameterResolver) -> None:
        """Append ``resolver``.

        Raises
        ------
        TypeError
            If ``resolver`` does not implement the resolver protocol.
        """
        if not isinstance(resolver, ParameterResolver):
            raise TypeError(
                f"{type(resolver).__name__} does not implement "
                "supports_parameter/resolve_parameter."
            )
        self._resolvers.append(resolver)

    def __len__(self) -> int:
        return len(self._resolvers)

    def find(self, parameter: ParameterContext) -> ParameterResolver | None:
        """Return the resolver supporting ``parameter``.

        Returns
        -------
        ParameterResolver | None
            The single supporting resolver, or ``None`` when none applies.

        Raises
        ------
        ParameterResolutionError
            If more than one resolver supports the parameter.
        """
        matches = [
            resolver for resolver in self._resolvers if resolver.supports_parameter(parameter)
        ]
        if not matches:
            return None
        if len(matches) > 1:
            names = ", ".join(type(resolver).__name__ for resolver in matches)
            raise ParameterResolutionError(
                f"Multiple resolvers ({names}) can resolve parameter '{parameter.name}'."
            )
        return matches[0]

    def supports(self, parameter: ParameterContext) -> bool:
        """Whether some registered resolver supports ``parameter``."""
        return self.find(parameter) is not None

    def resolve(self, parameter: ParameterContext, context: ExtensionContext) -> Any:
        """Resolve ``parameter`` through its supporting resolver."""
        resolver = self.find(parameter)
        if resolver is None:
            raise ParameterResolutionError(
                f"No resolver registered for parameter '{parameter.name}' "
                f"in {context.owner_name}.{context.method_name}."
            )
        return resolver.resolve_parameter(parameter, context)

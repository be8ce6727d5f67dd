"""Decorator wiring parameter resolvers into pytest test invocations."""

from __future__ import annotations

import functools
import inspect
import typing
from collections.abc import Callable
from typing import Any, TypeVar

import pytest

from asciidoc_testsupport.application.ports import ParameterResolver
from asciidoc_testsupport.context import ExtensionContext
from asciidoc_testsupport.resolvers.base import ParameterContext
from asciidoc_testsupport.resolvers.registry import ParameterResolverRegistry

F = TypeVar("F", bound=Callable[..., Any])
T = TypeVar("T")

REQUEST_ARG = "request"
TEST_PREFIX = "test"


def extend_with(*resolvers: ParameterResolver) -> Callable[[T], T]:
    """Resolve test parameters through ``resolvers``.

    Apply to a test class to wrap every ``test*`` function it defines, or to
    a single test function. Parameters claimed by a resolver are removed from
    the signature pytest sees and are supplied on each invocation. All
    resources created while resolving are released when the test returns or
    raises.

    Parameters
    ----------
    *resolvers : ParameterResolver
        Resolvers examined in order for each parameter.

    Returns
    -------
    Callable
        Class or function decorator.
    """
    registry = ParameterResolverRegistry(resolvers)

    def decorate(target: T) -> T:
        if inspect.isclass(target):
            for name, member in list(vars(target).items()):
                if name.startswith(TEST_PREFIX) and inspect.isfunction(member):
                    setattr(target, name, resolve_parameters(member, registry))
            return target
        if callable(target):
            return resolve_parameters(target, registry)  # type: ignore[return-value]
        raise TypeError(f"extend_with cannot decorate {target!r}.")

    return decorate


def resolve_parameters(function: F, registry: ParameterResolverRegistry) -> F:
    """Wrap ``function`` so ``registry`` supplies the parameters it supports."""
    signature = inspect.signature(function)
    hints = _type_hints(function)
    parameters = list(signature.parameters.values())
    resolved = [
        context
        for context in (
            ParameterContext.from_parameter(
                parameter, index, hints.get(parameter.name, inspect.Parameter.empty)
            )
            for index, parameter in enumerate(parameters)
        )
        if registry.supports(context)
    ]
    if not resolved:
        return function
    if inspect.iscoroutinefunction(function) or inspect.isasyncgenfunction(function):
        raise TypeError(
            f"{function.__qualname__} is asynchronous; resolved parameters require a "
            "synchronous test function."
        )

    resolved_names = {context.name for context in resolved}
    kept = [parameter for parameter in parameters if parameter.name not in resolved_names]
    wants_request = any(parameter.name == REQUEST_ARG for parameter in kept)
    if not wants_request:
        kept.append(
            inspect.Parameter(REQUEST_ARG, inspect.Parameter.KEYWORD_ONLY)
        )

    @functools.wraps(function)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        request: pytest.FixtureRequest = (
            kwargs[REQUEST_ARG] if wants_request else kwargs.pop(REQUEST_ARG)
        )
        with ExtensionContext(
            _owner(request),
            function,
            config=request.config,
        ) as context:
            for parameter in resolved:
                kwargs[parameter.name] = registry.resolve(parameter, context)
            return function(*args, **kwargs)

    wrapper.__signature__ = signature.replace(  # type: ignore[attr-defined]
        parameters=_ordered(kept)
    )
    return wrapper  # type: ignore[return-value]


def _owner(request: pytest.FixtureRequest) -> Any:
    return request.cls if request.cls is not None else request.module


def _type_hints(function: Callable[..., Any]) -> dict[str, Any]:
    try:
        return typing.get_type_hints(function, include_extras=True)
    except (NameError, TypeError):
        return _resolvable_hints(function)


def _resolvable_hints(function: Callable[..., Any]) -> dict[str, Any]:
    """Evaluate each annotation on its own, keeping only those that resolve."""
    namespace = getattr(inspect.unwrap(function), "__globals__", {})
    hints: dict[str, Any] = {}
    for name, annotation in inspect.get_annotations(function).items():
        if isinstance(annotation, str):
            try:
                annotation = eval(annotation, namespace)  # noqa: S307
            except (NameError, AttributeError, TypeError):
                # Names imported only for type checking cannot be resolved here.
                continue
        hints[name] = annotation
    return hints

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, TypeAlias, runtime_checkable

from lazybox._internal.integrations.pydantic_settings import (
    is_pydantic_model_instance,
    model_to_mapping,
)
from lazybox._internal.type_checks import is_plain_callable, is_suspendable_callable
from lazybox.exceptions import LazyboxInvalidProviderError

if TYPE_CHECKING:
    from lazybox._internal.container import Container


@runtime_checkable
class Provider(Protocol):
    """An object that configures a container from its ``register`` method."""

    def register(self, container: Container) -> Any: ...


ProviderFunction: TypeAlias = Callable[["Container"], Any]
"""A function configuring the container passed as its only argument."""


@dataclass(frozen=True, slots=True)
class CallableProvider:
    """Provider invoked directly with the container."""

    function: ProviderFunction

    def apply(self, container: Container) -> None:
        self.function(container)


@dataclass(frozen=True, slots=True)
class RegisterMethodProvider:
    """Provider exposing a ``register(container)`` entry point."""

    provider: Provider

    def apply(self, container: Container) -> None:
        self.provider.register(container)


ProviderAdapter: TypeAlias = CallableProvider | RegisterMethodProvider


def as_provider(provider: Any) -> ProviderAdapter:
    """Normalize a user provider into one of the two supported shapes.

    Plain functions and bound methods are invoked directly. Otherwise an
    object with a callable ``register`` attribute is used through it, and any
    remaining callable instance is invoked directly. Classes, even with a
    ``register`` method, and generator/coroutine functions are rejected.

    Args:
        provider: Provider function or object.

    Returns:
        The normalized provider.

    Raises:
        LazyboxInvalidProviderError: If no usable entry point exists.

    """
    if is_suspendable_callable(provider):
        msg = f"Invalid provider {provider!r}: generator and coroutine functions are not supported."
        raise LazyboxInvalidProviderError(msg)
    if is_plain_callable(provider):
        return CallableProvider(provider)
    if isinstance(provider, type):
        msg = f"Invalid provider {provider!r}: pass an instance, not the class."
        raise LazyboxInvalidProviderError(msg)
    if callable(getattr(provider, "register", None)):
        return RegisterMethodProvider(provider)
    if callable(provider):
        return CallableProvider(provider)

    msg = (
        f"Invalid provider {provider!r}: expected a callable taking the container "
        "or an object with a callable 'register' attribute."
    )
    raise LazyboxInvalidProviderError(msg)


def config_items(config: Any) -> list[tuple[Any, Any]]:
    """Return the key/value pairs ``register`` seeds after running a provider.

    Args:
        config: ``None``, a mapping, or a Pydantic settings/model instance.

    Raises:
        LazyboxInvalidProviderError: If ``config`` has any other shape.

    """
    if config is None:
        return []
    if isinstance(config, Mapping):
        return list(config.items())
    if is_pydantic_model_instance(config):
        return list(model_to_mapping(config).items())

    msg = f"Invalid provider config {config!r}: expected a mapping or a settings model."
    raise LazyboxInvalidProviderError(msg)


__all__ = [
    "CallableProvider",
    "Provider",
    "ProviderAdapter",
    "ProviderFunction",
    "RegisterMethodProvider",
    "as_provider",
    "config_items",
]

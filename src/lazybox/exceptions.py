from __future__ import annotations

from typing import Any


class LazyboxError(Exception):
    """Represent a base class for all lazybox-specific failures.

    Catch this type when you want to handle any lazybox error path without
    matching each concrete exception class individually.
    """


class LazyboxInvalidDefinitionError(LazyboxError):
    """Signal a service definition that does not reduce to a callable.

    Raised by ``Container.define``, ``Container.extend`` and
    ``Container.rebase`` at definition time, never at resolution time.

    Typical fixes include passing a callable, or a list/tuple whose last item
    is the callable and whose preceding items are dependency keys.
    """


class LazyboxMissingDependencyError(LazyboxError, KeyError):
    """Signal that a required key has no entry at resolution time.

    Raised by ``Container.require`` and ``Container.resolve`` (and therefore by
    ``get`` while resolving a service's dependencies). Resolution stops at the
    first missing key; missing keys are not collected.

    Typical fixes include ``set``-ing or ``define``-ing the named key before
    the dependent service is first accessed.
    """

    def __init__(self, key: Any) -> None:
        self.key = key
        super().__init__(f"Missing dependency '{key}'")

    def __str__(self) -> str:
        return str(self.args[0])


class LazyboxInvalidProviderError(LazyboxError):
    """Signal a provider or configuration payload ``register`` cannot apply.

    Raised by ``Container.register`` before the container is mutated when the
    provider is neither callable nor exposes a callable ``register``
    attribute, or when ``config`` is neither a mapping nor a settings model.
    """

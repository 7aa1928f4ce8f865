from __future__ import annotations

import itertools
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any, ClassVar, TypeAlias

from lazybox._internal.repeatable import RepeatableCallback
from lazybox.exceptions import LazyboxInvalidDefinitionError

Key: TypeAlias = Any
"""A hashable lookup identifier supplied by the user or minted by the container."""

DefinitionId: TypeAlias = int
"""A unique index assigned to each definition stored in a ``DefinitionArena``."""


class HiddenKey:
    """Opaque key holding the predecessor of a decorated service.

    ``Container.extend`` mints one per decoration. Hidden keys compare by
    identity and have no printable form, so pattern matching never sees them.
    """

    __slots__ = ("_number",)

    _COUNTER: ClassVar[Iterator[int]] = itertools.count()

    def __init__(self) -> None:
        self._number = next(HiddenKey._COUNTER)

    def __repr__(self) -> str:
        return f"HiddenKey({self._number})"


@dataclass(frozen=True, slots=True)
class ServiceDefinition:
    """Describe how a key's value is computed on first access.

    ``dependencies`` is always explicit: the implicit "inject the container"
    policy is applied when the definition is built. For decorations created by
    ``extend``, the first dependency is the ``HiddenKey`` holding the
    predecessor and ``ancestor`` points at the predecessor's definition.
    """

    callback: Callable[..., Any]
    """Callable invoked with the resolved dependencies as positional arguments."""
    dependencies: tuple[Key, ...] = ()
    """Keys resolved left to right and passed to ``callback``."""
    ancestor: DefinitionId | None = None
    """Definition decorated by this one, ``None`` for the root of a chain."""

    @property
    def is_repeatable(self) -> bool:
        return isinstance(self.callback, RepeatableCallback)


def parse_definition(definition: Any) -> tuple[Callable[..., Any], tuple[Key, ...] | None]:
    """Split a user definition into its callback and dependency keys.

    A list or tuple is read as ``[*dependencies, callback]``; anything else is
    a bare callback whose dependencies are left to the container's implicit
    policy (``None``). The caller's sequence is never mutated.

    Args:
        definition: Bare callable or sequence ending in a callable.

    Returns:
        The callback and the explicit dependency keys, or ``None`` when omitted.

    Raises:
        LazyboxInvalidDefinitionError: If no callable can be extracted.

    """
    dependencies: tuple[Key, ...] | None
    if isinstance(definition, (list, tuple)):
        if not definition:
            msg = "Invalid service definition: empty dependency list without a callback."
            raise LazyboxInvalidDefinitionError(msg)
        *leading, callback = definition
        dependencies = tuple(leading)
    else:
        callback, dependencies = definition, None

    if not callable(callback):
        msg = f"Invalid service definition: {callback!r} is not callable."
        raise LazyboxInvalidDefinitionError(msg)
    return callback, dependencies


class DefinitionArena:
    """Own every pending ``ServiceDefinition`` of a container.

    Definitions are immutable and addressed by ``DefinitionId``. Decoration
    chains link definitions through ``ancestor`` ids rather than object
    references, so replacing the root of a chain is a single ``replace`` at
    the root's id.
    """

    def __init__(self) -> None:
        self._definitions: dict[DefinitionId, ServiceDefinition] = {}
        self._ids = itertools.count()

    def add(self, definition: ServiceDefinition) -> DefinitionId:
        definition_id = next(self._ids)
        self._definitions[definition_id] = definition
        return definition_id

    def replace(self, definition_id: DefinitionId, definition: ServiceDefinition) -> None:
        if definition_id not in self._definitions:
            msg = f"Definition {definition_id} is not stored in this arena."
            raise KeyError(msg)
        self._definitions[definition_id] = definition

    def discard(self, definition_id: DefinitionId) -> None:
        self._definitions.pop(definition_id, None)

    def walk(self, definition_id: DefinitionId) -> Iterator[tuple[DefinitionId, ServiceDefinition]]:
        """Yield a definition and its ancestors, most recent decoration first."""
        current: DefinitionId | None = definition_id
        while current is not None:
            definition = self._definitions[current]
            yield current, definition
            current = definition.ancestor

    def root_of(self, definition_id: DefinitionId) -> DefinitionId:
        root_id = definition_id
        for root_id, _ in self.walk(definition_id):
            pass
        return root_id

    def clear(self) -> None:
        self._definitions.clear()

    def __getitem__(self, definition_id: DefinitionId) -> ServiceDefinition:
        return self._definitions[definition_id]

    def __contains__(self, definition_id: object) -> bool:
        return definition_id in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)


__all__ = [
    "DefinitionArena",
    "DefinitionId",
    "HiddenKey",
    "Key",
    "ServiceDefinition",
    "parse_definition",
]

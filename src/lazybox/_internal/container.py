from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any, TypeAlias

from lazybox._internal.definitions import (
    DefinitionArena,
    DefinitionId,
    HiddenKey,
    Key,
    ServiceDefinition,
    parse_definition,
)
from lazybox._internal.entries import Entry, PendingEntry, RepeatableEntry, ValueEntry
from lazybox._internal.patterns import MatchParameters, compile_key_pattern, printable_key
from lazybox._internal.providers import as_provider, config_items
from lazybox._internal.repeatable import RepeatableCallback, factory, unwrap_repeatable
from lazybox._internal.type_checks import accepts_positional_arguments
from lazybox.exceptions import LazyboxMissingDependencyError

if TYPE_CHECKING:
    from typing_extensions import Self

logger = logging.getLogger(__name__)

MatchCallback: TypeAlias = Callable[[Key, "MatchParameters", "Container"], Any]
"""Callback invoked by ``Container.match`` with the key, its parameters and the container."""


class Container:
    """Store values and lazily resolved services under arbitrary keys.

    Values are stored eagerly with ``set``. Services are stored with
    ``define`` as a callback plus dependency keys and are resolved on the
    first ``get``: dependencies are resolved left to right, the callback runs
    once and its result replaces the definition. Callbacks tagged with
    ``factory`` are repeatable and run again on every ``get``.

    ``extend`` decorates a key without touching its current definition, and
    ``rebase`` swaps the undecorated base of a decoration chain while keeping
    every decoration on top of it. The container itself is always reachable
    under its own key (the container object) and is what a bare callback
    receives when it accepts an argument.

    The container is single-threaded and does not detect dependency cycles.
    """

    factory = staticmethod(factory)

    def __init__(self) -> None:
        self._entries: dict[Key, Entry] = {}
        self._definitions = DefinitionArena()

    def set(self, key: Key, value: Any) -> Self:
        """Store ``value`` at ``key``, replacing any previous entry.

        Replacing a pending decoration also drops its hidden predecessors.

        A ``factory``-tagged callable is stored as a repeatable service called
        without arguments on every ``get``.

        Args:
            key: Hashable key.
            value: Value returned as-is by ``get``.

        Returns:
            The container, for chaining.

        """
        self._discard(key)
        self._entries[key] = ValueEntry(value)
        return self

    def define(self, key: Key, definition: Any) -> Self:
        """Store a lazily resolved service at ``key``, replacing any previous entry.

        ``definition`` is a callable or a list/tuple ``[*dependencies, callback]``.
        A bare callable receives the container when its signature accepts a
        positional argument, and nothing otherwise; an explicit list is used
        as-is, so ``[callback]`` always means no arguments.

        Args:
            key: Hashable key.
            definition: Bare callback or sequence ending in the callback.

        Returns:
            The container, for chaining.

        Raises:
            LazyboxInvalidDefinitionError: If no callable can be extracted.

        Examples:
            .. code-block:: python

                container.set("dsn", "sqlite://")
                container.define("engine", ["dsn", create_engine])
                container.define("session", lambda c: Session(c["engine"]))

        """
        callback, dependencies = parse_definition(definition)
        self._store_definition(key, self._build_definition(callback, dependencies))
        return self

    def extend(self, key: Key, definition: Any) -> Self:
        """Decorate the current value or definition of ``key``.

        The current entry becomes the first argument of the new callback,
        followed by the callback's own dependencies (or the container, for a
        bare callback that accepts a second argument). Extending a missing key
        is the same as ``define``. Calls chain: the last extension is the
        outermost decoration.

        Args:
            key: Hashable key.
            definition: Bare callback or sequence ending in the callback.

        Returns:
            The container, for chaining.

        Raises:
            LazyboxInvalidDefinitionError: If no callable can be extracted.

        """
        callback, dependencies = parse_definition(definition)
        entry = self._entries.get(key)
        if entry is None:
            self._store_definition(key, self._build_definition(callback, dependencies))
            return self

        if isinstance(entry, PendingEntry):
            base_id = entry.definition_id
        else:
            base_id = self._definitions.add(self._wrap_entry(entry))

        hidden_key = HiddenKey()
        self._entries[hidden_key] = PendingEntry(base_id)
        decoration = self._build_definition(
            callback,
            dependencies,
            leading=(hidden_key,),
            ancestor=base_id,
        )
        self._entries[key] = PendingEntry(self._definitions.add(decoration))
        logger.debug("Extended service %r, predecessor moved to %r", key, hidden_key)
        return self

    def rebase(self, key: Key, definition: Any) -> Self:
        """Replace the undecorated base of ``key`` and keep its decorations.

        When ``key`` holds a pending decoration chain, the root definition is
        overwritten in place and every decoration re-runs against it on the
        next ``get``. In every other case this is the same as ``define``.

        Args:
            key: Hashable key.
            definition: Bare callback or sequence ending in the callback.

        Returns:
            The container, for chaining.

        Raises:
            LazyboxInvalidDefinitionError: If no callable can be extracted.

        """
        callback, dependencies = parse_definition(definition)
        base = self._build_definition(callback, dependencies)
        entry = self._entries.get(key)
        if not isinstance(entry, PendingEntry):
            self._store_definition(key, base)
            return self

        root_id = self._reset_chain(entry.definition_id)
        self._definitions.replace(root_id, base)
        logger.debug("Rebased service %r onto a new root definition", key)
        return self

    def get(self, key: Key, default: Any = None) -> Any:
        """Return the value of ``key``, resolving its definition on first access.

        Args:
            key: Hashable key.
            default: Returned when ``key`` has no entry.

        Returns:
            The stored value, the memoized service, a fresh value for
            repeatable services, or ``default``.

        Raises:
            LazyboxMissingDependencyError: If a dependency of the service is missing.

        """
        if key is self:
            return self
        entry = self._entries.get(key)
        if entry is None:
            return default
        if isinstance(entry, RepeatableEntry):
            return entry.produce()
        if isinstance(entry, PendingEntry):
            return self._resolve_pending(key, entry.definition_id)
        if isinstance(entry.value, RepeatableCallback):
            repeatable = RepeatableEntry(entry.value)
            self._entries[key] = repeatable
            return repeatable.produce()
        return entry.value

    def require(self, key: Key) -> Any:
        """Return the value of ``key`` like ``get``, failing when it has no entry.

        Raises:
            LazyboxMissingDependencyError: If ``key`` has no entry.

        """
        if not self.has(key):
            raise LazyboxMissingDependencyError(key)
        return self.get(key)

    def resolve(self, definition: Any) -> list[Any]:
        """Resolve the dependencies of a definition, left to right.

        Args:
            definition: A ``ServiceDefinition`` or any form accepted by ``define``.

        Returns:
            The positional arguments the definition's callback is called with.

        Raises:
            LazyboxMissingDependencyError: On the first dependency without an entry.

        """
        if not isinstance(definition, ServiceDefinition):
            callback, dependencies = parse_definition(definition)
            definition = self._build_definition(callback, dependencies)
        return [self.require(dependency) for dependency in definition.dependencies]

    def raw(self, key: Key, default: Any = None) -> Any:
        """Return what is stored at ``key`` without resolving it.

        This is the value for plain entries, the ``ServiceDefinition`` for
        pending services and the producing callable for repeatable services.
        """
        if key is self:
            return self
        entry = self._entries.get(key)
        if entry is None:
            return default
        if isinstance(entry, PendingEntry):
            return self._definitions[entry.definition_id]
        if isinstance(entry, RepeatableEntry):
            return entry.produce
        return entry.value

    def has(self, key: Key) -> bool:
        return key is self or key in self._entries

    def setdefault(self, key: Key, value: Any) -> Any:
        """Return the value of ``key``, storing ``value`` first when it has no entry.

        An existing entry is never replaced: a pending service is resolved and
        its value returned.
        """
        if not self.has(key):
            self.set(key, value)
        return self.get(key)

    def delete(self, key: Key, *, deep: bool = False) -> bool:
        """Remove the entry at ``key`` and its bookkeeping.

        Removing a service may break services depending on it. The hidden
        predecessors of a pending decoration are kept unless ``deep`` is set.

        Args:
            key: Hashable key.
            deep: Also remove the immediate predecessor of a pending
                decoration. Earlier predecessors are kept.

        Returns:
            Whether an entry was removed.

        """
        entry = self._entries.get(key)
        if entry is None:
            return False
        if deep and isinstance(entry, PendingEntry):
            decoration = self._definitions[entry.definition_id]
            if decoration.ancestor is not None:
                self._discard(decoration.dependencies[0], chain=False)
        self._discard(key, chain=False)
        logger.debug("Deleted %r (deep=%s)", key, deep)
        return True

    def clear(self) -> None:
        self._entries.clear()
        self._definitions.clear()
        logger.debug("Cleared container")

    @property
    def size(self) -> int:
        """Number of stored keys, pending or resolved, hidden predecessors included."""
        return len(self._entries)

    def keys(self) -> list[Key]:
        return list(self._entries)

    def iter_matches(
        self,
        pattern: str,
        *,
        sensitive: bool = False,
        strict: bool = False,
        end: bool = True,
    ) -> Iterator[tuple[Key, MatchParameters]]:
        """Yield ``(key, parameters)`` for every stored key matching ``pattern``.

        Keys are visited in insertion order and matched on their string form;
        keys without one (hidden predecessors, objects whose ``str`` fails) are
        skipped. Entries are never resolved.

        Args:
            pattern: Path-style pattern such as ``foo.:bar.:baz?``.
            sensitive: Match case-sensitively.
            strict: Disallow an optional trailing ``/``.
            end: Require the whole key to match rather than a prefix.

        Yields:
            Matching keys with their captured parameters; optional parameters
            that did not match are ``None``.

        """
        key_pattern = compile_key_pattern(pattern, sensitive=sensitive, strict=strict, end=end)
        for key in list(self._entries):
            text = printable_key(key)
            if text is None:
                continue
            parameters = key_pattern.match(text)
            if parameters is not None:
                yield key, parameters

    def match(
        self,
        pattern: str,
        callback: MatchCallback,
        *,
        sensitive: bool = False,
        strict: bool = False,
        end: bool = True,
    ) -> None:
        """Call ``callback(key, parameters, container)`` for every matching key.

        See ``iter_matches`` for the matching rules.
        """
        for key, parameters in self.iter_matches(
            pattern,
            sensitive=sensitive,
            strict=strict,
            end=end,
        ):
            callback(key, parameters, self)

    def register(self, provider: Any, config: Any = None) -> Self:
        """Apply a provider, then seed ``config`` entries over its result.

        Args:
            provider: Function taking the container, or an object with a
                ``register(container)`` method.
            config: Mapping or Pydantic settings instance. Each item is
                ``set`` after the provider ran, overriding its values.

        Returns:
            The container, for chaining.

        Raises:
            LazyboxInvalidProviderError: If the provider or config cannot be
                used. Nothing is mutated in that case.

        """
        adapter = as_provider(provider)
        items = config_items(config)
        adapter.apply(self)
        for key, value in items:
            self.set(key, value)
        logger.debug("Registered provider %r with %d config entries", provider, len(items))
        return self

    def _build_definition(
        self,
        callback: Callable[..., Any],
        dependencies: tuple[Key, ...] | None,
        *,
        leading: tuple[Key, ...] = (),
        ancestor: DefinitionId | None = None,
    ) -> ServiceDefinition:
        if dependencies is None:
            inject_container = accepts_positional_arguments(
                unwrap_repeatable(callback),
                len(leading) + 1,
            )
            dependencies = (self,) if inject_container else ()
        return ServiceDefinition(
            callback=callback,
            dependencies=(*leading, *dependencies),
            ancestor=ancestor,
        )

    def _store_definition(self, key: Key, definition: ServiceDefinition) -> None:
        self._discard(key)
        self._entries[key] = PendingEntry(self._definitions.add(definition))
        logger.debug("Defined service %r with %d dependencies", key, len(definition.dependencies))

    def _discard(self, key: Key, *, chain: bool = True) -> None:
        entry = self._entries.pop(key, None)
        if not isinstance(entry, PendingEntry):
            return
        if chain:
            self._retire_chain(entry.definition_id)
        else:
            self._definitions.discard(entry.definition_id)

    def _wrap_entry(self, entry: ValueEntry | RepeatableEntry) -> ServiceDefinition:
        if isinstance(entry, RepeatableEntry):
            return ServiceDefinition(callback=factory(entry.produce))
        value = entry.value
        if isinstance(value, RepeatableCallback):
            return ServiceDefinition(callback=value)
        return ServiceDefinition(callback=lambda: value)

    def _resolve_pending(self, key: Key, definition_id: DefinitionId) -> Any:
        definition = self._definitions[definition_id]
        root = self._definitions[self._definitions.root_of(definition_id)]
        logger.debug("Resolving service %r", key)

        resolved: ValueEntry | RepeatableEntry
        if root.is_repeatable:
            resolved = RepeatableEntry(self._capture_chain(definition_id))
        else:
            resolved = ValueEntry(definition.callback(*self.resolve(definition)))

        # A callback that replaced or removed ``key`` keeps its own entry.
        if self._entries.get(key) == PendingEntry(definition_id):
            self._entries[key] = resolved
            if not isinstance(key, HiddenKey):
                self._retire_chain(definition_id)
        if isinstance(resolved, RepeatableEntry):
            return resolved.produce()
        return resolved.value

    def _capture_chain(self, definition_id: DefinitionId) -> Callable[[], Any]:
        chain = [definition for _, definition in self._definitions.walk(definition_id)]
        chain.reverse()
        root, decorations = chain[0], chain[1:]
        root_arguments = self.resolve(root)
        layers = [
            (
                decoration.callback,
                [self.require(dependency) for dependency in decoration.dependencies[1:]],
            )
            for decoration in decorations
        ]

        def produce() -> Any:
            value = root.callback(*root_arguments)
            for callback, arguments in layers:
                value = callback(value, *arguments)
            return value

        return produce

    def _reset_chain(self, definition_id: DefinitionId) -> DefinitionId:
        root_id = definition_id
        for root_id, definition in self._definitions.walk(definition_id):
            if definition.ancestor is not None:
                self._entries[definition.dependencies[0]] = PendingEntry(definition.ancestor)
        return root_id

    def _retire_chain(self, definition_id: DefinitionId) -> None:
        """Drop every definition of a chain and the hidden slots between them."""
        for chain_id, definition in list(self._definitions.walk(definition_id)):
            if definition.ancestor is not None:
                self._entries.pop(definition.dependencies[0], None)
            self._definitions.discard(chain_id)

    def __contains__(self, key: object) -> bool:
        return self.has(key)

    def __getitem__(self, key: Key) -> Any:
        return self.require(key)

    def __delitem__(self, key: Key) -> None:
        if not self.delete(key):
            raise KeyError(key)

    def __iter__(self) -> Iterator[Key]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return self.size

    def __bool__(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self.size})"


__all__ = ["Container", "MatchCallback"]

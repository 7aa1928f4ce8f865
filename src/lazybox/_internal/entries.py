from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeAlias

from lazybox._internal.definitions import DefinitionId


@dataclass(frozen=True, slots=True)
class ValueEntry:
    """A raw value, or the memoized result of a resolved definition."""

    value: Any


@dataclass(frozen=True, slots=True)
class PendingEntry:
    """A definition waiting for its first access."""

    definition_id: DefinitionId


@dataclass(frozen=True, slots=True)
class RepeatableEntry:
    """A repeatable service whose arguments are already captured.

    ``produce`` re-runs the repeatable callback (and any decorations layered
    on it) on every call.
    """

    produce: Callable[[], Any]


Entry: TypeAlias = ValueEntry | PendingEntry | RepeatableEntry


__all__ = ["Entry", "PendingEntry", "RepeatableEntry", "ValueEntry"]

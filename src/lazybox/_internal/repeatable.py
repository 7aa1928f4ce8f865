from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from lazybox.exceptions import LazyboxInvalidDefinitionError


@dataclass(frozen=True, slots=True)
class RepeatableCallback:
    """Tag a callback as repeatable instead of memoized.

    The container never caches what a repeatable callback returns: the first
    access resolves and captures its arguments, and every ``get`` calls the
    callback again with those same arguments.
    """

    callback: Callable[..., Any]

    def __call__(self, *args: Any) -> Any:
        return self.callback(*args)


def factory(callback: Callable[..., Any]) -> RepeatableCallback:
    """Mark ``callback`` as a repeatable service.

    Usable directly (``container.define("uuid", factory(uuid4))``) or as a
    decorator. Wrapping an already repeatable callback returns it unchanged.

    Args:
        callback: Callable producing a fresh value on each call.

    Returns:
        The tagged callback.

    Raises:
        LazyboxInvalidDefinitionError: If ``callback`` is not callable.

    """
    if isinstance(callback, RepeatableCallback):
        return callback
    if not callable(callback):
        msg = f"factory() expects a callable, got {callback!r}."
        raise LazyboxInvalidDefinitionError(msg)
    return RepeatableCallback(callback)


def unwrap_repeatable(callback: Callable[..., Any]) -> Callable[..., Any]:
    if isinstance(callback, RepeatableCallback):
        return callback.callback
    return callback


__all__ = ["RepeatableCallback", "factory", "unwrap_repeatable"]

from __future__ import annotations

import inspect
from collections.abc import Callable
from inspect import Parameter
from typing import Any

_POSITIONAL_KINDS = (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)


def accepts_positional_arguments(candidate: Callable[..., Any], count: int) -> bool:
    """Return true when candidate can be called with ``count`` positional arguments.

    Callables whose signature cannot be inspected (some builtins and C
    extension types) are reported as not accepting any.

    Args:
        candidate: Callable whose signature is inspected.
        count: Number of positional arguments the caller intends to pass.

    """
    try:
        parameters = inspect.signature(candidate).parameters.values()
    except (TypeError, ValueError):
        return False

    positional = 0
    for parameter in parameters:
        if parameter.kind is Parameter.VAR_POSITIONAL:
            return True
        if parameter.kind in _POSITIONAL_KINDS:
            positional += 1
    return positional >= count


def is_plain_callable(candidate: object) -> bool:
    """Return true for functions, bound methods and builtins."""
    return (
        inspect.isfunction(candidate)
        or inspect.ismethod(candidate)
        or inspect.isbuiltin(candidate)
    )


def is_suspendable_callable(candidate: object) -> bool:
    """Return true for generator, coroutine and async-generator functions."""
    unwrapped = inspect.unwrap(candidate) if callable(candidate) else candidate
    return (
        inspect.isgeneratorfunction(unwrapped)
        or inspect.iscoroutinefunction(unwrapped)
        or inspect.isasyncgenfunction(unwrapped)
    )


__all__ = [
    "accepts_positional_arguments",
    "is_plain_callable",
    "is_suspendable_callable",
]

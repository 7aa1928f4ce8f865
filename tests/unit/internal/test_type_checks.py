from __future__ import annotations

import functools
from collections.abc import AsyncIterator, Iterator
from typing import Any

import pytest

from lazybox._internal.type_checks import (
    accepts_positional_arguments,
    is_plain_callable,
    is_suspendable_callable,
)


def _no_arguments() -> None: ...


def _one_argument(first: Any) -> None: ...


def _keyword_only(*, first: Any) -> None: ...


def _variadic(*args: Any) -> None: ...


def _defaulted(first: Any = None) -> None: ...


class _Service:
    def __init__(self, container: Any) -> None:
        self.container = container


class _Empty:
    pass


@pytest.mark.parametrize(
    ("candidate", "count", "expected"),
    [
        (_no_arguments, 1, False),
        (_one_argument, 1, True),
        (_one_argument, 2, False),
        (_keyword_only, 1, False),
        (_variadic, 3, True),
        (_defaulted, 1, True),
        (_Service, 1, True),
        (_Empty, 1, False),
        (functools.partial(_one_argument, 1), 1, False),
        (lambda first, second: None, 2, True),
    ],
)
def test_accepts_positional_arguments(candidate: Any, count: int, expected: bool) -> None:
    assert accepts_positional_arguments(candidate, count) is expected


def test_uninspectable_callables_accept_no_arguments() -> None:
    class Opaque:
        @property
        def __signature__(self) -> Any:
            msg = "no signature"
            raise ValueError(msg)

        def __call__(self, *args: Any) -> None: ...

    assert accepts_positional_arguments(Opaque(), 1) is False


def test_is_plain_callable() -> None:
    assert is_plain_callable(_no_arguments) is True
    assert is_plain_callable(_Service(None).__init__) is True
    assert is_plain_callable(len) is True
    assert is_plain_callable(_Service) is False
    assert is_plain_callable(object()) is False


def test_is_suspendable_callable() -> None:
    def generator() -> Iterator[int]:
        yield 1

    async def coroutine() -> None: ...

    async def async_generator() -> AsyncIterator[int]:
        yield 1

    @functools.wraps(generator)
    def wrapped(*args: Any) -> Any:
        return generator(*args)

    assert is_suspendable_callable(generator) is True
    assert is_suspendable_callable(coroutine) is True
    assert is_suspendable_callable(async_generator) is True
    assert is_suspendable_callable(wrapped) is True
    assert is_suspendable_callable(_no_arguments) is False
    assert is_suspendable_callable("text") is False

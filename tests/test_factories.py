from __future__ import annotations

import itertools
import random

import pytest

from lazybox import Container, LazyboxInvalidDefinitionError, RepeatableCallback, factory


def test_set_factory_produces_a_new_value_on_each_get(container: Container) -> None:
    container.set("a", factory(random.random))

    first = container.get("a")
    second = container.get("a")

    assert isinstance(first, float)
    assert first != second


def test_defined_factory_produces_a_new_value_on_each_get(container: Container) -> None:
    counter = itertools.count()
    container.define("a", factory(lambda: next(counter)))

    assert [container.get("a") for _ in range(3)] == [0, 1, 2]


def test_non_repeatable_service_returns_the_cached_value(container: Container) -> None:
    container.define("a", lambda: object())

    assert container.get("a") is container.get("a")


def test_factory_arguments_are_resolved_once(container: Container) -> None:
    resolved: list[str] = []

    def build_prefix() -> str:
        resolved.append("prefix")
        return "id"

    counter = itertools.count(1)
    container.define("prefix", build_prefix)
    container.define("id", ["prefix", factory(lambda prefix: f"{prefix}-{next(counter)}")])

    assert container.get("id") == "id-1"
    assert container.get("id") == "id-2"
    assert resolved == ["prefix"]


def test_bare_factory_accepting_an_argument_receives_the_container(
    container: Container,
) -> None:
    container.define("self", factory(lambda box: box))

    assert container.get("self") is container


def test_factory_is_usable_as_a_decorator(container: Container) -> None:
    counter = itertools.count(1)

    @factory
    def next_number() -> int:
        return next(counter)

    container.define("number", next_number)

    assert isinstance(next_number, RepeatableCallback)
    assert container.get("number") == 1
    assert container.get("number") == 2


def test_container_exposes_factory(container: Container) -> None:
    wrapped = container.factory(list)

    assert isinstance(wrapped, RepeatableCallback)
    assert Container.factory(wrapped) is wrapped


def test_factory_state_is_created_lazily(container: Container) -> None:
    calls: list[int] = []
    container.set("a", factory(lambda: calls.append(1)))

    assert calls == []
    assert isinstance(container.raw("a"), RepeatableCallback)

    container.get("a")
    container.get("a")
    assert calls == [1, 1]


def test_raw_of_started_factory_returns_the_producer(container: Container) -> None:
    counter = itertools.count(5)
    container.define("a", factory(lambda: next(counter)))
    container.get("a")

    produce = container.raw("a")

    assert callable(produce)
    assert produce() == 6
    assert container.get("a") == 7


def test_factory_survives_exceptions_from_its_callback(container: Container) -> None:
    outcomes = iter([RuntimeError("boom"), "ok"])

    def produce() -> str:
        outcome = next(outcomes)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    container.set("a", factory(produce))

    with pytest.raises(RuntimeError, match="boom"):
        container.get("a")
    assert container.get("a") == "ok"


def test_setting_a_key_discards_the_factory(container: Container) -> None:
    container.set("a", factory(random.random))
    container.get("a")

    container.set("a", 1)

    assert container.get("a") == 1


def test_factory_rejects_non_callables() -> None:
    with pytest.raises(LazyboxInvalidDefinitionError, match="expects a callable"):
        factory("not callable")  # type: ignore[arg-type]

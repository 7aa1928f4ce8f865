"""Matching: enumerate keys by pattern without building services.

Patterns use ``:name`` placeholders, ``?`` for optional ones, and ``.`` or
``/`` as separators. Pending services are never resolved by matching.
"""

from __future__ import annotations

from typing import Any

from lazybox import Container


def main() -> None:
    container = Container()
    container.set("foo.bar.baz", "foo")
    container.set("foo.bar", "bar")
    container.set("baz.bar", "foo")

    built: list[str] = []
    container.define("handlers.users", lambda: built.append("users"))
    container.define("handlers.orders", lambda: built.append("orders"))

    matches: list[tuple[Any, Any]] = []
    container.match("foo.:bar.:baz?", lambda key, params, _: matches.append((key, params)))
    print(f"first={matches[0]}")  # => first=('foo.bar.baz', {'bar': 'bar', 'baz': 'baz'})
    print(f"second={matches[1]}")  # => second=('foo.bar', {'bar': 'bar', 'baz': None})

    handlers = [params["name"] for _, params in container.iter_matches("handlers.:name")]
    print(f"handlers={handlers}")  # => handlers=['users', 'orders']
    print(f"built={built}")  # => built=[]


if __name__ == "__main__":
    main()

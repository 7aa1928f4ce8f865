"""Decorations: stacking ``extend`` calls and swapping the base with ``rebase``.

1. Each ``extend`` receives the previous value as its first argument.
2. ``rebase`` replaces the undecorated service and keeps every decoration.
3. Extensions chain indefinitely.
"""

from __future__ import annotations

from lazybox import Container


def build_container() -> Container:
    container = Container()
    container.set("punctuation", "!")
    container.define("greeting", lambda: "hello")
    container.extend("greeting", lambda previous: previous.upper())
    container.extend("greeting", ["punctuation", lambda previous, mark: previous + mark])
    return container


def main() -> None:
    container = build_container()
    print(f"greeting={container.get('greeting')}")  # => greeting=HELLO!

    rebased = build_container()
    rebased.rebase("greeting", lambda: "goodbye")
    print(f"rebased={rebased.get('greeting')}")  # => rebased=GOODBYE!

    counter = Container()
    counter.define("count", lambda: 1)
    for _ in range(3):
        counter.extend("count", lambda previous: previous + 1)
    print(f"count={counter.get('count')}")  # => count=4


if __name__ == "__main__":
    main()

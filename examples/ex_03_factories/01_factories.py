"""Factories: repeatable services that run on every access.

Services are memoized by default. Wrap a callback with ``factory`` to get a
fresh value from each ``get`` while its dependencies are resolved only once.
"""

from __future__ import annotations

import itertools

from lazybox import Container, factory


def main() -> None:
    container = Container()

    ticket_numbers = itertools.count(1)
    container.set("ticket", factory(lambda: next(ticket_numbers)))
    print(f"first_ticket={container.get('ticket')}")  # => first_ticket=1
    print(f"second_ticket={container.get('ticket')}")  # => second_ticket=2

    request_numbers = itertools.count(100)
    container.set("prefix", "REQ")
    container.define(
        "request_id",
        ["prefix", factory(lambda prefix: f"{prefix}-{next(request_numbers)}")],
    )
    print(f"first_request={container.get('request_id')}")  # => first_request=REQ-100
    print(f"second_request={container.get('request_id')}")  # => second_request=REQ-101

    container.define("session", lambda: object())
    same_session = container.get("session") is container.get("session")
    print(f"session_memoized={same_session}")  # => session_memoized=True


if __name__ == "__main__":
    main()

"""Quickstart: values, lazy services and their dependencies.

Store plain values with ``set``, describe services with ``define`` and let
the container build them on first access.
"""

from __future__ import annotations

from lazybox import Container


class Database:
    def __init__(self, dsn: str) -> None:
        self.dsn = dsn


class UserRepository:
    def __init__(self, database: Database) -> None:
        self.database = database


def main() -> None:
    container = Container()
    container.set("db.dsn", "sqlite:///app.db")
    container.define("db", ["db.dsn", Database])
    container.define("users", ["db", UserRepository])

    print(f"defined={container.has('users')}")  # => defined=True

    repository = container.get("users")
    print(f"dsn={repository.database.dsn}")  # => dsn=sqlite:///app.db
    print(f"memoized={container.get('users') is repository}")  # => memoized=True
    print(f"missing={container.get('cache')}")  # => missing=None


if __name__ == "__main__":
    main()

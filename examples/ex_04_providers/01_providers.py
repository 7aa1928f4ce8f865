"""Providers: grouping registrations and overriding them with config.

A provider is a function taking the container, or an object with a
``register`` method. ``register`` applies config entries after the provider
ran, so config always wins.
"""

from __future__ import annotations

from lazybox import Container


class LoggingProvider:
    def register(self, container: Container) -> None:
        container.set("log.level", "INFO")
        container.define("log.format", ["log.level", lambda level: f"[{level}] %(message)s"])


def database_provider(container: Container) -> None:
    container.set("db.host", "localhost")
    container.set("db.port", 5432)


def main() -> None:
    container = Container()
    container.register(LoggingProvider(), {"log.level": "DEBUG"})
    container.register(database_provider)

    print(f"format={container.get('log.format')}")  # => format=[DEBUG] %(message)s
    print(f"port={container.get('db.port')}")  # => port=5432
    print(f"timeout={container.setdefault('db.timeout', 30)}")  # => timeout=30
    print(f"host={container.setdefault('db.host', 'example.org')}")  # => host=localhost


if __name__ == "__main__":
    main()

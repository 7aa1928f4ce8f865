from __future__ import annotations

from typing import Any

import pytest

from lazybox._internal.container import Container

LAZYBOX_PROVIDER_MARKER = "lazybox_provider"


def pytest_configure(config: pytest.Config) -> None:
    """Declare the ``lazybox_provider`` marker so strict-marker runs accept it."""
    config.addinivalue_line(
        "markers",
        f"{LAZYBOX_PROVIDER_MARKER}(provider, config=None): register a provider on the "
        "lazybox_container fixture before the test runs.",
    )


@pytest.fixture()
def lazybox_container(request: pytest.FixtureRequest) -> Container:
    """Create a per-test container with the providers requested by markers.

    Every ``@pytest.mark.lazybox_provider(provider, config=None)`` applying to
    the test is passed to ``Container.register``. Module and class markers are
    registered before the markers of the test function, so function-level
    configuration wins.

    The fixture is function-scoped: registrations are isolated between tests
    unless users override it.

    Returns:
        A new ``Container`` instance.

    """
    container = Container()
    markers = list(request.node.iter_markers(name=LAZYBOX_PROVIDER_MARKER))
    for marker in reversed(markers):
        _register_from_marker(container, marker)
    return container


def _register_from_marker(container: Container, marker: Any) -> None:
    if not marker.args:
        msg = f"@pytest.mark.{LAZYBOX_PROVIDER_MARKER} requires a provider argument."
        raise pytest.UsageError(msg)
    container.register(*marker.args, **marker.kwargs)

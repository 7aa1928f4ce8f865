"""Shared pytest fixtures for lazybox tests."""

import pytest

from lazybox.container import Container

pytest_plugins = ["lazybox.integrations.pytest_plugin"]


@pytest.fixture()
def container() -> Container:
    """Empty container."""
    return Container()

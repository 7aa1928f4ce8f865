from lazybox.integrations.pytest_plugin.plugin import (
    lazybox_container,
    pytest_configure,
)

__all__ = ["lazybox_container", "pytest_configure"]

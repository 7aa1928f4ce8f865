from lazybox.container import Container, RepeatableCallback, factory
from lazybox.definitions import HiddenKey, ServiceDefinition
from lazybox.exceptions import (
    LazyboxError,
    LazyboxInvalidDefinitionError,
    LazyboxInvalidProviderError,
    LazyboxMissingDependencyError,
)
from lazybox.providers import Provider

__all__ = [
    "Container",
    "HiddenKey",
    "LazyboxError",
    "LazyboxInvalidDefinitionError",
    "LazyboxInvalidProviderError",
    "LazyboxMissingDependencyError",
    "Provider",
    "RepeatableCallback",
    "ServiceDefinition",
    "factory",
]

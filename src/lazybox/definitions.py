from lazybox._internal.definitions import HiddenKey, Key, ServiceDefinition

__all__ = ["HiddenKey", "Key", "ServiceDefinition"]

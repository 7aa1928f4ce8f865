from lazybox._internal.container import Container, MatchCallback
from lazybox._internal.repeatable import RepeatableCallback, factory

__all__ = ["Container", "MatchCallback", "RepeatableCallback", "factory"]

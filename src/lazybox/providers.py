from lazybox._internal.providers import Provider, ProviderFunction

__all__ = ["Provider", "ProviderFunction"]

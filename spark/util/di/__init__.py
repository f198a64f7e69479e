"""Dependency injection wiring.

Providers come in two kinds. Concrete providers (config, domain services,
use cases) are always used as-is. Mockable components (persistence and
realtime) declare a base class with a production and a mock subclass, and
the container picks one of them.
"""

from typing import Type

from spark.util.di.application import ProdApplicationProvider
from spark.util.di.base import Component, ProviderBase
from spark.util.di.core import ProdConfigProvider
from spark.util.di.domain import ProdDomainProvider
from spark.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
    ProdRealtimeProvider,
    RealtimeProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
    RealtimeProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve the provider class to instantiate for ``base``.

    Raises:
        ValueError: If a mockable component lacks the requested implementation
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for impl in implementations:
        if impl.__is_mock__ == use_mock:
            return impl

    kind = "mock" if use_mock else "production"
    raise ValueError(f"No {kind} implementation for {base.__mock_component__}")


__all__ = [
    "Component",
    "PROVIDERS",
    "PersistenceProvider",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdPersistenceProvider",
    "ProdRealtimeProvider",
    "ProviderBase",
    "RealtimeProvider",
    "get_provider",
]

"""Dependency injection module.

PROVIDERS lists one entry per concern. An entry without subclasses is used
as-is. An entry with subclasses is a swappable component (currently only
persistence): its subclasses are the production and mock implementations,
told apart by ``__is_mock__``.
"""

from typing import Type

from crushboard.util.di.application import ProdApplicationProvider
from crushboard.util.di.base import Component, ProviderBase
from crushboard.util.di.core import ProdConfigProvider
from crushboard.util.di.domain import ProdDomainProvider
from crushboard.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Swappable: PostgreSQL in production, in-memory in tests
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the provider class to instantiate for a PROVIDERS entry.

    Args:
        base: Entry of PROVIDERS
        use_mock: Whether the mock implementation is wanted

    Returns:
        Provider class (not instantiated)

    Raises:
        ValueError: If the component has no implementation of that kind
    """
    implementations = {
        getattr(impl, "__is_mock__", False): impl for impl in base.__subclasses__()
    }
    if not implementations:
        return base

    try:
        return implementations[use_mock]
    except KeyError:
        component = base.__mock_component__ or base.__name__
        kind = "mock" if use_mock else "production"
        raise ValueError(f"Component {component} has no {kind} provider") from None


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]

"""Dependency injection module."""

from typing import Type

from participa.util.di.application import ProdApplicationProvider
from participa.util.di.base import Component, ProviderBase
from participa.util.di.core import ProdConfigProvider, ProdPasswordProvider
from participa.util.di.domain import ProdDomainProvider
from participa.util.di.infrastructure import (
    CaptchaProvider,
    MailProvider,
    OAuthAggregatorProvider,
    PersistenceProvider,
    ProdCaptchaProvider,
    ProdMailProvider,
    ProdPersistenceProvider,
    ProdTwitterProvider,
    TwitterProvider,
)

# Order is irrelevant to dishka; grouped for reading
PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdPasswordProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Swappable infrastructure
    PersistenceProvider,
    TwitterProvider,
    MailProvider,
    CaptchaProvider,
    # Builds the provider -> OAuth client map from the clients above
    OAuthAggregatorProvider,
]


def swappable_components() -> set[str]:
    """Names of the components that have a production and a mock provider."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.is_swappable() and base.__mock_component__
    }


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "swappable_components",
    "ProdConfigProvider",
    "ProdPasswordProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "CaptchaProvider",
    "MailProvider",
    "OAuthAggregatorProvider",
    "PersistenceProvider",
    "TwitterProvider",
    "ProdCaptchaProvider",
    "ProdMailProvider",
    "ProdPersistenceProvider",
    "ProdTwitterProvider",
]

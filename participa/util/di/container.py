"""Container construction and FastAPI wiring."""

from collections.abc import Collection

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from participa.util.di import PROVIDERS, Component


def create_container(
    mocked: Collection[Component] = (), with_fastapi: bool = True
) -> AsyncContainer:
    """Build a container with one provider per entry of ``PROVIDERS``.

    Settings are loaded from environment variables by the config provider.

    Args:
        mocked: Components served by their mock implementation. The mock
            providers must already be imported (they live in the test suite).
        with_fastapi: Add dishka's FastAPI provider, needed when the
            container serves HTTP requests

    Raises:
        ConfigurationError: If a mocked component has no mock provider
    """
    providers = [
        base.implementation(use_mock=base.__mock_component__ in mocked)()
        for base in PROVIDERS
    ]
    if with_fastapi:
        providers.append(FastapiProvider())
    return make_async_container(*providers)


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Serve the app's ``FromDishka`` dependencies from ``container``."""
    setup_dishka(container, app)

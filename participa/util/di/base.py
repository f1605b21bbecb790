"""Provider metadata and implementation selection."""

from typing import ClassVar, Literal

from dishka import Provider

from participa.util.error import ConfigurationError

# Infrastructure components that tests can swap for in-memory fakes
Component = Literal["persistence", "twitter", "mail", "captcha"]


class ProviderBase(Provider):
    """Base for every provider listed in ``PROVIDERS``.

    A provider with subclasses is a swappable component: each subclass is
    either the production or the mock implementation (``__is_mock__``).
    A provider without subclasses is used as-is.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False

    @classmethod
    def is_swappable(cls) -> bool:
        return bool(cls.__subclasses__())

    @classmethod
    def implementation(cls, use_mock: bool) -> type["ProviderBase"]:
        """Pick the subclass to instantiate for this component.

        Raises:
            ConfigurationError: If no implementation of the requested kind
                has been imported
        """
        if not cls.is_swappable():
            return cls

        for impl in cls.__subclasses__():
            if impl.__is_mock__ == use_mock:
                return impl

        kind = "mock" if use_mock else "production"
        raise ConfigurationError(
            f"No {kind} implementation for {cls.__mock_component__ or cls.__name__}"
        )

"""Mock providers for testing."""

from .captcha import MockCaptchaProvider
from .mail import MockMailProvider
from .twitter import MockTwitterProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockCaptchaProvider",
    "MockMailProvider",
    "MockTwitterProvider",
    "MockPersistenceProvider",
    "build_test_container",
]

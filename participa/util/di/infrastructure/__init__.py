"""Infrastructure providers."""

# Import bases
from .captcha import CaptchaProvider
from .mail import MailProvider
from .oauth import OAuthAggregatorProvider
from .persistence import PersistenceProvider
from .twitter import TwitterProvider

# Import implementations (needed for __subclasses__())
from .captcha import ProdCaptchaProvider  # noqa: F401
from .mail import ProdMailProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401
from .twitter import ProdTwitterProvider  # noqa: F401

__all__ = [
    "CaptchaProvider",
    "MailProvider",
    "OAuthAggregatorProvider",
    "PersistenceProvider",
    "ProdCaptchaProvider",
    "ProdMailProvider",
    "ProdPersistenceProvider",
    "ProdTwitterProvider",
    "TwitterProvider",
]

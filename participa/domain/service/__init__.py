"""Domain services."""

from .auth_service import AuthService, OAuthClient
from .base import Service
from .captcha import CaptchaVerifier
from .collision_service import CollisionResolver
from .confirmation_service import ConfirmationGate
from .identity_link_service import IdentityLinkService, LinkResult
from .mailer import Mailer
from .password_service import PasswordHasher, PasswordService
from .session_service import IssuedSession, SessionService, SignOutResult
from .signup_service import SignupCompletionService, SignupSubmission
from .slug import is_placeholder_email, placeholder_email, slugify
from .token_service import TokenService, hash_token

__all__ = [
    "AuthService",
    "CaptchaVerifier",
    "CollisionResolver",
    "ConfirmationGate",
    "IdentityLinkService",
    "IssuedSession",
    "LinkResult",
    "Mailer",
    "OAuthClient",
    "PasswordHasher",
    "PasswordService",
    "Service",
    "SessionService",
    "SignOutResult",
    "SignupCompletionService",
    "SignupSubmission",
    "TokenService",
    "hash_token",
    "is_placeholder_email",
    "placeholder_email",
    "slugify",
]

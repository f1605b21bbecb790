"""Authentication use cases."""

from .complete_signup import CompleteSignupUseCase
from .confirm_email import ConfirmEmailUseCase
from .get_current_account import GetCurrentAccountUseCase
from .initiate_login import InitiateLoginUseCase
from .provider_callback import ProviderCallbackUseCase
from .register import RegisterUseCase
from .request_password_reset import RequestPasswordResetUseCase
from .resend_confirmation import ResendConfirmationUseCase
from .reset_password import ResetPasswordUseCase
from .sign_in import SignInUseCase
from .sign_out import SignOutUseCase

__all__ = [
    "CompleteSignupUseCase",
    "ConfirmEmailUseCase",
    "GetCurrentAccountUseCase",
    "InitiateLoginUseCase",
    "ProviderCallbackUseCase",
    "RegisterUseCase",
    "RequestPasswordResetUseCase",
    "ResendConfirmationUseCase",
    "ResetPasswordUseCase",
    "SignInUseCase",
    "SignOutUseCase",
]

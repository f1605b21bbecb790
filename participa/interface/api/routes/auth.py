"""Authentication routes."""

import logging
from urllib.parse import urlencode

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Response, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from participa.adapter.error import AdapterError
from participa.application.usecase.auth import (
    CompleteSignupUseCase,
    ConfirmEmailUseCase,
    GetCurrentAccountUseCase,
    InitiateLoginUseCase,
    ProviderCallbackUseCase,
    RegisterUseCase,
    RequestPasswordResetUseCase,
    ResendConfirmationUseCase,
    ResetPasswordUseCase,
    SignInUseCase,
    SignOutUseCase,
)
from participa.application.usecase.auth.complete_signup import (
    CompleteSignupRequest,
    CompleteSignupResponse,
    SignupStatus,
)
from participa.application.usecase.auth.confirm_email import (
    ConfirmEmailRequest,
    ConfirmEmailResponse,
)
from participa.application.usecase.auth.get_current_account import (
    GetCurrentAccountRequest,
    GetCurrentAccountResponse,
)
from participa.application.usecase.auth.initiate_login import (
    InitiateLoginRequest,
    InitiateLoginResponse,
)
from participa.application.usecase.auth.provider_callback import (
    ProviderCallbackRequest,
)
from participa.application.usecase.auth.register import (
    RegisterRequest,
    RegisterResponse,
)
from participa.application.usecase.auth.request_password_reset import (
    RequestPasswordResetRequest,
    RequestPasswordResetResponse,
)
from participa.application.usecase.auth.resend_confirmation import (
    ResendConfirmationRequest,
    ResendConfirmationResponse,
)
from participa.application.usecase.auth.reset_password import (
    ResetPasswordRequest,
    ResetPasswordResponse,
)
from participa.application.usecase.auth.sign_in import SignInRequest, SignInResponse
from participa.application.usecase.auth.sign_out import (
    SignOutRequest,
    SignOutResponse,
)
from participa.config import Settings
from participa.domain.error import DomainError
from participa.domain.value import AuthProvider

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)

SESSION_COOKIE = "auth_token"
SIGNUP_TICKET_COOKIE = "signup_ticket"


class CompleteSignupAPIRequest(BaseModel):
    """Finish-signup form.

    The signup ticket is read from this body or, failing that, from the
    cookie set by the provider callback.
    """

    username: str | None = None
    email: str | None = None
    signup_ticket: str | None = None


def _cookie_options(settings: Settings) -> dict:
    """Cookie attributes for the current environment.

    Production (cross-subdomain): participa.example -> api.participa.example
      - samesite="none" required for cross-site requests
      - secure=True required when samesite="none"
    Development (same-origin): localhost:3000 -> localhost:8000
      - samesite="lax", secure=False to allow HTTP
    """
    is_production = settings.environment == "production"
    return {
        "httponly": True,
        "secure": is_production,
        "samesite": "none" if is_production else "lax",
        "domain": settings.auth.cookie_domain if is_production else None,
        "path": "/",
    }


def _set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=SESSION_COOKIE,
        value=token,
        max_age=settings.auth.session_expiry_days * 24 * 60 * 60,
        **_cookie_options(settings),
    )


def _delete_cookie(response: Response, key: str, settings: Settings) -> None:
    # Must match the domain/path the cookie was created with
    options = _cookie_options(settings)
    response.delete_cookie(key=key, domain=options["domain"], path=options["path"])


def _error_redirect(settings: Settings, error: str) -> RedirectResponse:
    query = urlencode({"error": error})
    return RedirectResponse(
        url=f"{settings.api.frontend_url}/auth/error?{query}",
        status_code=status.HTTP_302_FOUND,
    )


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    request: RegisterRequest,
    register_use_case: FromDishka[RegisterUseCase],
) -> RegisterResponse:
    """Register an account with username, email and password.

    The account stays unconfirmed until the emailed link is followed.

    Errors:
        422: Missing or malformed fields, failed captcha (per-field ``errors``)
        409: Username or email already taken
    """
    return await register_use_case.execute(request)


@router.post("/login", response_model=InitiateLoginResponse)
async def initiate_login(
    request: InitiateLoginRequest,
    initiate_login_use_case: FromDishka[InitiateLoginUseCase],
) -> InitiateLoginResponse:
    """Start an OAuth login with an identity provider.

    Example:
        POST /auth/login
        {"provider": "twitter"}

        Response:
        {"authorization_url": "https://twitter.com/i/oauth2/authorize?..."}
    """
    try:
        logger.info(f"Initiating {request.provider.value} login")
        return await initiate_login_use_case.execute(request)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except AdapterError as e:
        logger.error(f"Failed to initiate {request.provider.value} login: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to initiate login",
        )


@router.get("/callback/{provider}")
async def provider_callback(
    provider: AuthProvider,
    code: str,
    state: str,
    provider_callback_use_case: FromDishka[ProviderCallbackUseCase],
    settings: FromDishka[Settings],
):
    """Handle the OAuth callback from an identity provider.

    Redirects to the frontend:
    - home, with the ``auth_token`` cookie, when the account is signed in
    - ``/auth/finish-signup``, with the ``signup_ticket`` cookie, when the
      account must choose a username or email
    - ``/auth/confirmation-pending`` when the email must be confirmed first
    - ``/auth/error?error=registration_failed`` when the provider's answer
      cannot be used

    Example:
        GET /auth/callback/twitter?code=abc123&state=xyz789
    """
    logger.info(f"OAuth callback received: provider={provider.value}")

    try:
        result = await provider_callback_use_case.execute(
            ProviderCallbackRequest(provider=provider, code=code, state=state)
        )
    except ValueError as e:
        logger.error(f"Unsupported provider in callback: {e}")
        return _error_redirect(settings, "unsupported_provider")
    except (DomainError, AdapterError) as e:
        logger.error(f"Provider login failed: {type(e).__name__}: {e}")
        return _error_redirect(settings, "registration_failed")
    except Exception as e:
        logger.exception(f"Unexpected error during OAuth callback: {e}")
        return _error_redirect(settings, "unexpected")

    frontend_url = settings.api.frontend_url

    if result.needs_completion and result.signup_ticket:
        query = urlencode({"account_id": result.account.account_id})
        redirect_response = RedirectResponse(
            url=f"{frontend_url}/auth/finish-signup?{query}",
            status_code=status.HTTP_302_FOUND,
        )
        redirect_response.set_cookie(
            key=SIGNUP_TICKET_COOKIE,
            value=result.signup_ticket,
            max_age=settings.auth.signup_ticket_ttl_minutes * 60,
            **_cookie_options(settings),
        )
        logger.info(f"Redirecting account {result.account.account_id} to finish signup")
        return redirect_response

    if result.awaiting_confirmation or not result.session_token:
        return RedirectResponse(
            url=f"{frontend_url}/auth/confirmation-pending",
            status_code=status.HTTP_302_FOUND,
        )

    # Cookies must be set on the RedirectResponse that is returned
    redirect_response = RedirectResponse(
        url=frontend_url, status_code=status.HTTP_302_FOUND
    )
    _set_session_cookie(redirect_response, result.session_token, settings)
    logger.info(f"Provider login successful for account {result.account.account_id}")
    return redirect_response


async def _complete_signup(
    account_id: str,
    request: CompleteSignupAPIRequest,
    resolve_collision: bool,
    ticket_cookie: str | None,
    response: Response,
    use_case: CompleteSignupUseCase,
    settings: Settings,
) -> CompleteSignupResponse:
    result = await use_case.execute(
        CompleteSignupRequest(
            account_id=account_id,
            signup_ticket=request.signup_ticket or ticket_cookie,
            username=request.username,
            email=request.email,
            resolve_collision=resolve_collision,
        )
    )

    if result.status == SignupStatus.COMPLETE and result.session_token:
        _set_session_cookie(response, result.session_token, settings)
    if result.status != SignupStatus.COLLISION_RESOLUTION_REQUIRED:
        _delete_cookie(response, SIGNUP_TICKET_COOKIE, settings)
    return result


@router.post(
    "/signup/{account_id}",
    response_model=CompleteSignupResponse,
    response_model_exclude={"session_token"},
)
async def complete_signup(
    account_id: str,
    request: CompleteSignupAPIRequest,
    response: Response,
    complete_signup_use_case: FromDishka[CompleteSignupUseCase],
    settings: FromDishka[Settings],
    signup_ticket: str | None = Cookie(default=None),
) -> CompleteSignupResponse:
    """Submit the finish-signup form for a pending provider account.

    Returns ``status``:
    - ``awaiting_confirmation``: a confirmation link was emailed
    - ``complete``: signed in (``auth_token`` cookie set)
    - ``collision_resolution_required``: ``errors`` names the fields owned
      by another account; resubmit to ``/auth/signup/{account_id}/resolve``

    Errors:
        404: Unknown account or missing signup ticket
        409: Account is not awaiting a submission
        422: Unusable username or email
    """
    return await _complete_signup(
        account_id,
        request,
        False,
        signup_ticket,
        response,
        complete_signup_use_case,
        settings,
    )


@router.post(
    "/signup/{account_id}/resolve",
    response_model=CompleteSignupResponse,
    response_model_exclude={"session_token"},
)
async def resolve_signup_collision(
    account_id: str,
    request: CompleteSignupAPIRequest,
    response: Response,
    complete_signup_use_case: FromDishka[CompleteSignupUseCase],
    settings: FromDishka[Settings],
    signup_ticket: str | None = Cookie(default=None),
) -> CompleteSignupResponse:
    """Resubmit the signup form after a username or email collision."""
    return await _complete_signup(
        account_id,
        request,
        True,
        signup_ticket,
        response,
        complete_signup_use_case,
        settings,
    )


@router.get(
    "/confirm",
    response_model=ConfirmEmailResponse,
    response_model_exclude={"session_token"},
)
async def confirm_email(
    confirmation_token: str,
    response: Response,
    confirm_email_use_case: FromDishka[ConfirmEmailUseCase],
    settings: FromDishka[Settings],
) -> ConfirmEmailResponse:
    """Redeem an emailed confirmation link.

    Signs the account in when its signup is complete.

    Errors:
        400: Unknown, spent, superseded or expired token (``resend_available``)
    """
    result = await confirm_email_use_case.execute(
        ConfirmEmailRequest(confirmation_token=confirmation_token)
    )
    if result.session_token:
        _set_session_cookie(response, result.session_token, settings)
    return result


@router.post("/confirm/resend", response_model=ResendConfirmationResponse)
async def resend_confirmation(
    request: ResendConfirmationRequest,
    resend_confirmation_use_case: FromDishka[ResendConfirmationUseCase],
) -> ResendConfirmationResponse:
    """Email a fresh confirmation link. Always accepted."""
    return await resend_confirmation_use_case.execute(request)


@router.post("/password/reset-request", response_model=RequestPasswordResetResponse)
async def request_password_reset(
    request: RequestPasswordResetRequest,
    request_password_reset_use_case: FromDishka[RequestPasswordResetUseCase],
) -> RequestPasswordResetResponse:
    """Email password reset instructions. Always accepted."""
    return await request_password_reset_use_case.execute(request)


@router.post("/password/reset", response_model=ResetPasswordResponse)
async def reset_password(
    request: ResetPasswordRequest,
    response: Response,
    reset_password_use_case: FromDishka[ResetPasswordUseCase],
    settings: FromDishka[Settings],
) -> ResetPasswordResponse:
    """Set a new password with an emailed reset token.

    Every session of the account is destroyed.

    Errors:
        422: Password too short or not matching its confirmation
        400: Unknown, spent or expired token
    """
    result = await reset_password_use_case.execute(request)
    _delete_cookie(response, SESSION_COOKIE, settings)
    return result


@router.post(
    "/sign-in",
    response_model=SignInResponse,
    response_model_exclude={"session_token"},
)
async def sign_in(
    request: SignInRequest,
    response: Response,
    sign_in_use_case: FromDishka[SignInUseCase],
    settings: FromDishka[Settings],
) -> SignInResponse:
    """Sign in with email and password.

    Errors:
        401: Wrong email or password
        403: Email not confirmed yet
    """
    result = await sign_in_use_case.execute(request)
    _set_session_cookie(response, result.session_token, settings)
    return result


@router.post("/logout", response_model=SignOutResponse)
async def logout(
    response: Response,
    sign_out_use_case: FromDishka[SignOutUseCase],
    settings: FromDishka[Settings],
    auth_token: str | None = Cookie(default=None),
) -> SignOutResponse:
    """Destroy the current session and clear the authentication cookie.

    Signing out without a session succeeds too.
    """
    result = await sign_out_use_case.execute(SignOutRequest(token=auth_token))
    _delete_cookie(response, SESSION_COOKIE, settings)
    return result


@router.get("/me", response_model=GetCurrentAccountResponse)
async def get_current_account(
    get_current_account_use_case: FromDishka[GetCurrentAccountUseCase],
    auth_token: str | None = Cookie(default=None),
) -> GetCurrentAccountResponse:
    """Get the current account if authenticated.

    This endpoint is safe to call without authentication - it returns
    ``authenticated=false`` instead of raising an error.
    """
    return await get_current_account_use_case.execute(
        GetCurrentAccountRequest(token=auth_token)
    )

"""Mapping of domain and adapter errors to HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from participa.adapter.error import AdapterError
from participa.domain.error import (
    ConflictError,
    IncompleteSignupError,
    InvalidCredentialsError,
    InvalidSignupTransition,
    InvalidTokenError,
    NotFoundError,
    UnconfirmedAccountError,
    ValidationError,
)

logger = logging.getLogger(__name__)


async def validation_error_handler(request: Request, exc: ValidationError):
    logger.info(f"Validation failed on {request.url.path}: {sorted(exc.errors)}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": "Validation failed", "errors": exc.errors},
    )


async def conflict_error_handler(request: Request, exc: ConflictError):
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "detail": str(exc),
            "errors": {exc.field: "has already been taken"},
        },
    )


async def invalid_token_handler(request: Request, exc: InvalidTokenError):
    # Expired tokens land here too; a fresh link can always be requested
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc), "resend_available": True},
    )


async def invalid_credentials_handler(request: Request, exc: InvalidCredentialsError):
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": str(exc)},
    )


async def unconfirmed_account_handler(request: Request, exc: UnconfirmedAccountError):
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={
            "detail": "You have to confirm your email address before continuing.",
            "resend_available": True,
        },
    )


async def incomplete_signup_handler(request: Request, exc: IncompleteSignupError):
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={
            "detail": "You have to finish signing up before continuing.",
            "signup_state": exc.signup_state,
        },
    )


async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc)},
    )


async def invalid_transition_handler(request: Request, exc: InvalidSignupTransition):
    logger.warning(f"Rejected signup transition: state={exc.state}, event={exc.event}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": str(exc), "signup_state": exc.state},
    )


async def adapter_error_handler(request: Request, exc: AdapterError):
    logger.error(f"External service failed on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": "An external service is unavailable, please try again"},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the error handlers on the application."""
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ConflictError, conflict_error_handler)
    app.add_exception_handler(InvalidTokenError, invalid_token_handler)
    app.add_exception_handler(InvalidCredentialsError, invalid_credentials_handler)
    app.add_exception_handler(UnconfirmedAccountError, unconfirmed_account_handler)
    app.add_exception_handler(IncompleteSignupError, incomplete_signup_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(InvalidSignupTransition, invalid_transition_handler)
    app.add_exception_handler(AdapterError, adapter_error_handler)

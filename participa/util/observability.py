"""Logfire setup and instrumentation.

Every credential this service handles (passwords, emailed tokens, signup
tickets, session cookies) must stay out of spans and logs. Logfire's
scrubber covers attribute names matching ``SENSITIVE_PATTERNS`` and the
FastAPI mapper drops those endpoint arguments before they are recorded.

Usage:
    import logfire

    logfire.info("Account created", account_id=str(account.id))

    with logfire.span("identity_link_service.resolve", provider=provider.value):
        ...
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from participa.config import Settings

SERVICE_NAME = "participa-accounts"

# Added to logfire's defaults (password, secret, session, cookie, ...)
SENSITIVE_PATTERNS = [
    "confirmation_token",
    "reset_password_token",
    "signup_ticket",
    "captcha_response",
    "password_confirmation",
]

_SENSITIVE_ARGUMENTS = frozenset(
    SENSITIVE_PATTERNS + ["password", "auth_token", "token"]
)


def _send_to_logfire(settings: Settings) -> bool:
    # Explicit setting wins, otherwise send whenever a token is configured
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the process.

    ``OBSERVABILITY__LOGFIRE_TOKEN`` enables export to Logfire cloud;
    ``OBSERVABILITY__SEND_TO_LOGFIRE`` overrides that choice. Without a
    token everything goes to the console only.
    """
    send = _send_to_logfire(settings)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version="0.1.0",
        environment=settings.environment,
        send_to_logfire=send,
        token=settings.observability.logfire_token,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SENSITIVE_PATTERNS),
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send,
    )


def _request_attributes(request, attributes: dict) -> dict:
    """Record the route and caller, never credential arguments."""
    values = attributes.get("values") or {}
    mapped = {
        **attributes,
        "values": {
            name: value
            for name, value in values.items()
            if name not in _SENSITIVE_ARGUMENTS
        },
    }
    if getattr(request, "client", None):
        mapped["client_host"] = request.client.host
    return mapped


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request handled by ``app``."""
    # Headers carry the session cookie
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries issued through ``engine``."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)


def instrument_httpx() -> None:
    """Trace outbound calls to identity providers and the captcha service."""
    logfire.instrument_httpx()

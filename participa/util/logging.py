"""Stdlib logging setup and log-safe formatting helpers."""

import logging
import sys

from participa.config import Settings

# Chatty at INFO; their warnings are still shown
QUIET_LOGGERS = ("httpx", "httpcore", "passlib", "aiosmtplib")


def setup_logging(settings: Settings) -> None:
    """Route stdlib logging (the HTTP layer and uvicorn) to stdout.

    Domain and adapter code logs through logfire instead.
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"Logging configured: environment={settings.environment}, "
        f"level={logging.getLevelName(level)}"
    )


def redact_email(email: str | None) -> str:
    """Mask the local part of an email address for log output.

    Example: ``manuela@madrid.es`` -> ``m***@madrid.es``
    """
    if not email or "@" not in email:
        return "***"
    local, _, domain = email.partition("@")
    return f"{local[:1]}***@{domain}"

#!/usr/bin/env python3
"""Serve the Participa accounts API under uvicorn."""

import sys

import logfire
import uvicorn

from participa.config import Settings
from participa.util.logging import setup_logging
from participa.util.observability import configure_logfire


def main() -> int:
    settings = Settings()

    # Logfire first so that import-time failures of the app are reported
    configure_logfire(settings)
    setup_logging(settings)

    try:
        logfire.info(
            "Starting accounts API", environment=settings.environment, port=settings.port
        )
        uvicorn.run(
            "participa.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
            proxy_headers=settings.environment != "development",
        )
        return 0
    except Exception as e:
        logfire.error(
            "Accounts API failed to start",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""Apply Alembic migrations to the accounts database.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py 3f1c9a7d2b10
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from participa.config import Settings
from participa.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    settings = Settings()
    configure_logfire(settings)

    target = argv[1] if len(argv) > 1 else "head"
    alembic_cfg = Config("alembic.ini")

    with logfire.span("run_migrations", target=target):
        try:
            command.upgrade(alembic_cfg, target)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                target=target,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # The container must not start against a half-migrated schema
            raise

    logfire.info("Database migrations applied", target=target)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))

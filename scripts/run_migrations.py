#!/usr/bin/env python3
"""Upgrade the QueryNet schema to the latest alembic revision."""

import sys

import logfire
from alembic import command
from alembic.config import Config

from querynet.config import Settings
from querynet.util.observability import configure_logfire

ALEMBIC_INI = "alembic.ini"


def main() -> int:
    settings = Settings()
    configure_logfire(settings)

    logfire.info("Upgrading schema", config=ALEMBIC_INI, environment=settings.environment)
    try:
        command.upgrade(Config(ALEMBIC_INI), "head")
    except Exception as e:
        logfire.error(
            "Schema upgrade failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise

    logfire.info("Schema is at head")
    return 0


if __name__ == "__main__":
    sys.exit(main())

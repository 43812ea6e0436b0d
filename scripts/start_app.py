#!/usr/bin/env python3
"""Serve the QueryNet API with uvicorn."""

import sys

import logfire
import uvicorn

from querynet.config import Settings
from querynet.util.observability import configure_logfire

APP_PATH = "querynet.interface.api.app:app"


def main() -> int:
    settings = Settings()
    # Configured before import so failures while building the app are reported
    configure_logfire(settings)

    logfire.info("Serving QueryNet API", port=settings.port)
    try:
        uvicorn.run(APP_PATH, host="0.0.0.0", port=settings.port, log_level="info")
    except Exception as e:
        logfire.error(
            "QueryNet API failed to start",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Run the summarizer service with uvicorn.

    python -m app.summarizer
"""

import logging
import sys

import uvicorn

from .config import get_settings
from .exceptions import StartupError
from .main import configure_logging

logger = logging.getLogger("app.summarizer")


def main() -> int:
    settings = get_settings()
    configure_logging(settings.log_level)

    try:
        settings.require_credentials()
    except StartupError as e:
        logger.critical("FATAL: %s", e)
        return 1

    logger.info("Listening on http://%s:%d/summarize", settings.host, settings.port)
    uvicorn.run(
        "app.summarizer.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())

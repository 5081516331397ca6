"""Process-wide logging setup, called once at application startup."""

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)-30s - %(message)s"

_configured = False


def configure_logging(level: str = "INFO") -> None:
    """Attach one stream handler to the `pursuit` logger. Idempotent."""
    global _configured
    logger = logging.getLogger("pursuit")
    logger.setLevel(level.upper())
    if _configured:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    _configured = True

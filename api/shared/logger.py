"""
Logging setup for the item picker backend.

main.py calls ``setup_logging`` with the configured level; every other
module asks for its own logger:

    from api.shared.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Processing batch of %d items", len(batch))
    logger.exception("Error in %s tick", "commit")
"""

import logging
import sys

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Send log records to stdout at ``level`` (ITEMPICKER_LOG_LEVEL).

    Only the first call configures logging, so each test app built by
    ``create_app`` leaves the existing setup alone.
    """
    global _configured
    if _configured:
        return

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module of the ``api`` package or main.py."""
    return logging.getLogger(name)

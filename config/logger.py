"""
Central logging setup for the playlist timeline server.

Usage:
    from config.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Timeline built for %s", playlist_id)
"""

import logging
import os
import sys

_configured = False


def setup_logging(level: str | None = None) -> None:
    """Configure root logging once at startup (app/main.py). Later calls are no-ops."""
    global _configured
    if _configured:
        return

    level = level or os.getenv("LOG_LEVEL", "INFO")
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    _configured = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)

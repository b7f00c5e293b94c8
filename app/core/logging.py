"""Logging configuration for the application."""
import logging
import sys

from app.config import settings


def setup_logging() -> None:
    """Configure application-wide logging.

    Level comes from settings.LOG_LEVEL; output goes to stdout.
    """
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

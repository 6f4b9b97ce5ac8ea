"""Logging setup for the CLI."""

import sys

from loguru import logger

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def _stderr_sink(message) -> None:
    # Resolve sys.stderr per message so redirected streams (e.g. CliRunner) are honoured
    sys.stderr.write(message)


def configure_logging(level: str = "WARNING") -> None:
    """Replace loguru's default handler with a stderr handler at ``level``."""
    logger.remove()
    logger.add(_stderr_sink, level=level.upper(), format="{level}: {message}")

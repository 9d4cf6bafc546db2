"""
Job search logger.

Configures loguru for the aggregation layer and provides helpers that add a
[jobs] prefix. Connector and aggregator modules import from here rather than
from loguru directly.
"""

import sys

from loguru import logger

CONTEXT_PREFIX = "[jobs]"

# Default level colors for console output
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_logger(level: str = "INFO", sink=sys.stderr) -> int:
    """
    Replace loguru's default handler with a single console sink.

    Args:
        level: Minimum level shown (e.g. "DEBUG", "INFO")
        sink: Where records are written (defaults to stderr)

    Returns:
        Handler id, usable with logger.remove()
    """
    logger.remove()

    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    return logger.add(
        sink,
        format="{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>",
        level=level.upper(),
        colorize=sink in (sys.stderr, sys.stdout),
    )


def info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def error(message: str) -> None:
    logger.error(f"{CONTEXT_PREFIX} {message}")


def debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")

"""Loguru sink configuration."""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

DEBUG_LOG_NAME = "cyber-zen-debug.log"


def configure_logging(verbose: bool = False, log_dir: Optional[Path] = None) -> None:
    """Route diagnostics to stderr and, if log_dir exists, a debug log file."""
    logger.remove()
    # Resolve sys.stderr per message so redirected streams are honoured
    logger.add(
        lambda message: sys.stderr.write(message),
        level="DEBUG" if verbose else "WARNING",
        format="<level>{level: <8}</level> {message}",
    )

    if log_dir is None or not log_dir.is_dir():
        return

    logger.add(
        log_dir / DEBUG_LOG_NAME,
        level="DEBUG",
        rotation="1 MB",
        retention=3,
        encoding="utf-8",
    )

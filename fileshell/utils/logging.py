"""Logging configuration."""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional

from fileshell.config import CONFIG_DIR


def setup_logging(
    debug: bool = False,
    log_file: Optional[Path] = None
) -> None:
    """
    Configure logging for the completion shell.

    Completion runs on every key press, so per-request detail goes to the
    rotating file at DEBUG level and the console only shows warnings
    unless debug is set.

    Args:
        debug: Enable debug logging
        log_file: Optional log file path (defaults to ~/.fileshell/logs/completion.log)
    """
    log_level = logging.DEBUG if debug else logging.WARNING

    if log_file is None:
        log_dir = CONFIG_DIR / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / "completion.log"

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ))

    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging initialized (console level={logging.getLevelName(log_level)})")
    logger.debug(f"Log file: {log_file}")

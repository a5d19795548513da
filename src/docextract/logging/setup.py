"""Logging setup: JSON rotating file + human-readable console.

Two handlers are attached to the root logger:
    1. RotatingFileHandler -- JSON records (one per line), DEBUG level
    2. StreamHandler -- plain text on stderr, INFO level by default

The file handler is optional so the CLI can run without creating a log
directory. Library modules only ever call logging.getLogger(__name__); the
host application decides whether to call setup_logging() at all.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from pythonjsonlogger.json import JsonFormatter


def setup_logging(
    log_dir: Optional[str] = "logs",
    log_level_file: int = logging.DEBUG,
    log_level_console: int = logging.INFO,
    max_bytes: int = 10_485_760,  # 10MB
    backup_count: int = 5,
) -> None:
    """Configure root logging for an extraction run.

    Clears existing root handlers first so repeated calls (tests, CLI
    re-entry) do not duplicate output.

    Args:
        log_dir: Directory for the JSON log file, or None for console only.
        log_level_file: Level for the file handler (default DEBUG).
        log_level_console: Level for the console handler (default INFO).
        max_bytes: Maximum size per log file before rotation (default 10MB).
        backup_count: Number of rotated files to keep (default 5).
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    if log_dir is not None:
        Path(log_dir).mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=str(Path(log_dir) / "extraction.log"),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level_file)
        file_handler.setFormatter(
            JsonFormatter(
                fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
                rename_fields={
                    "asctime": "timestamp",
                    "levelname": "level",
                    "name": "component",
                },
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level_console)
    console_handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(console_handler)

    # pdfminer logs every object it touches at DEBUG
    logging.getLogger("pdfminer").setLevel(logging.WARNING)

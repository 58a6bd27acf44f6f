"""
Centralized logging configuration for the high-quality variant pipeline.

Provides:
- Console handler: warnings and errors only (INFO when verbose)
- File handler: captures all details with rotation (DEBUG level)
"""

import logging
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Module-level state
_logging_initialized = False
_log_file_path: Path | None = None


def setup_logging(
    log_dir: Path | None = None,
    job_name: str = "hq_variants",
    verbose: bool = False,
    file_level: int = logging.DEBUG,
    max_bytes: int = 5 * 1024 * 1024,  # 5MB
    backup_count: int = 3,
) -> Path:
    """
    Initialize logging with console and rotating file handlers.

    Args:
        log_dir: Directory under which a logs/ folder is created. Defaults to cwd.
        job_name: Name prefix for log file.
        verbose: Show INFO messages on the console.
        file_level: Log level for file output.
        max_bytes: Maximum size per log file before rotation.
        backup_count: Number of backup files to keep.

    Returns:
        Path to the log file.
    """
    global _logging_initialized, _log_file_path

    if _logging_initialized and _log_file_path is not None:
        return _log_file_path

    log_path = (log_dir or Path.cwd()) / "logs"
    log_path.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_path / f"{job_name}_{timestamp}.log"

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture everything, handlers filter
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO if verbose else logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(console_handler)

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    root_logger.addHandler(file_handler)

    _logging_initialized = True
    _log_file_path = log_file
    return log_file


def reset_logging() -> None:
    """Reset logging state. Useful for testing."""
    global _logging_initialized, _log_file_path
    _logging_initialized = False
    _log_file_path = None

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        handler.close()
        root_logger.removeHandler(handler)

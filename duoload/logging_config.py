import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Literal

from rich.console import Console
from rich.logging import RichHandler

# Define standard log levels
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

logger = logging.getLogger(__name__)


def setup_logging(
    level: LogLevel = "INFO",
    log_file: Path | str | None = None,
    max_bytes: int = 10 * 1024 * 1024,  # 10 MB
    backup_count: int = 5,
) -> None:
    """Configure logging for the application.

    Console output goes to stderr through rich, so stdout stays free for
    exported data. A rotating log file is added when ``log_file`` is given.

    Args:
        level: The minimum logging level to capture.
        log_file: Optional path to a log file.
        max_bytes: The maximum size of the log file before rotation.
        backup_count: The number of backup log files to keep.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers attached to the root logger to avoid duplication
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = RichHandler(
        level=log_level,
        console=Console(stderr=True),
        show_time=True,
        show_level=True,
        show_path=False,
        rich_tracebacks=True,
        markup=False,  # card text may contain square brackets
    )
    console_handler.setFormatter(logging.Formatter("%(name)s - %(message)s"))
    root_logger.addHandler(console_handler)

    if not log_file:
        logger.debug("File logging skipped as no log_file was provided.")
        return

    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    try:
        file_handler = RotatingFileHandler(
            filename=log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
    except OSError:
        # Continue with console logging only
        logger.error("Failed to set up file logging to %s", log_file, exc_info=True)
        return
    file_handler.setLevel(log_level)
    file_handler.setFormatter(logging.Formatter(log_format, datefmt=date_format))
    root_logger.addHandler(file_handler)
    logger.debug("Added RotatingFileHandler for file: %s", log_file)

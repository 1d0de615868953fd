"""Logging configuration for Skill Radar."""
import logging
import logging.handlers
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 3

# Loggers that report progress per batch of rows or jobs
PROGRESS_LOGGERS = (
    "src.ingest.cleaning",
    "src.ingest.loader",
    "src.matching.cross_matcher",
    "src.matching.inverted_index",
)


def quiet_progress_loggers(quiet: bool = True) -> None:
    """Raise progress loggers to WARNING, or hand them back to the root level."""
    level = logging.WARNING if quiet else logging.NOTSET
    for name in PROGRESS_LOGGERS:
        logging.getLogger(name).setLevel(level)


def setup_logging(
    level: str = "INFO",
    log_file: str | Path | None = None,
    quiet: bool = False,
) -> None:
    """Configure Skill Radar logging.

    Handlers are installed once; later calls only adjust the progress
    loggers.

    Args:
        level: Root log level name (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path for a rotating log file
        quiet: Silence indexing, loading and matching progress messages
    """
    quiet_progress_loggers(quiet)

    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        )

    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

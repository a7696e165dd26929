import logging
import logging.handlers
from pathlib import Path
from typing import Optional

DEFAULT_LOG_DIR = Path(__file__).parent.parent / "logs"
LOG_FILENAME = "dashboard.log"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Marks handlers installed here so repeat calls can detect them
_HANDLER_TAG = "_ops_dashboard_handler"


def setup_logging(
    log_level: str = "INFO",
    log_dir: Optional[Path] = None,
    logger_name: Optional[str] = None,
) -> Path:
    """Attach rotating-file and console handlers for the dashboard.

    Args:
        log_level: Level name for the logger and its console handler.
        log_dir: Where ``dashboard.log`` lives. Defaults to ``logs/``.
        logger_name: Logger to configure. ``None`` means the root logger.

    Returns:
        Path to the log file. Calling again is a no-op.
    """
    log_dir = Path(log_dir) if log_dir is not None else DEFAULT_LOG_DIR
    log_file = log_dir / LOG_FILENAME

    target = logging.getLogger(logger_name)
    if any(getattr(h, _HANDLER_TAG, False) for h in target.handlers):
        return log_file

    log_dir.mkdir(parents=True, exist_ok=True)
    level = getattr(logging, log_level.upper(), logging.INFO)
    target.setLevel(level)

    # File handler with rotation (5MB max, keep 3 backups)
    file_handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    file_handler.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    for handler in (file_handler, console_handler):
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_TAG, True)
        target.addHandler(handler)

    logging.getLogger(__name__).info("Logging initialized (level=%s, file=%s)", log_level, log_file)
    return log_file

"""
Log file setup for the acacia_bloom package logger.

Every engine module logs under "acacia_bloom.<module>", so one rotating
file handler on the package logger captures them all.  By default the file
records degraded inputs (WARNING and above); in verbose mode it also
records the per-stage DEBUG trace of each forecast.
"""
import logging
import logging.handlers
from datetime import date
from pathlib import Path
from typing import Optional, Union

PACKAGE_LOGGER = "acacia_bloom"
LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3


def log_file_path(log_dir: Union[str, Path], app_name: str = PACKAGE_LOGGER, day: Optional[date] = None) -> Path:
    """Daily log file: <log_dir>/<app_name>_YYYYMMDD.log"""
    day = day or date.today()
    return Path(log_dir) / f"{app_name}_{day.strftime('%Y%m%d')}.log"


def _file_handlers(logger: logging.Logger):
    return [h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]


def setup_logging(
    log_dir: Optional[Union[str, Path]] = None,
    verbose: bool = False,
    app_name: str = PACKAGE_LOGGER,
) -> logging.Logger:
    """
    Attach the forecast log file to the package logger.

    Calling again with the same directory only updates the file level;
    a different directory replaces the file handler.

    Args:
        log_dir: Directory for log files (created if missing).  None uses
                 <project_root>/logs.
        verbose: Record DEBUG stage traces, not only warnings
        app_name: Logger to configure and log file prefix

    Returns:
        The configured logger
    """
    if log_dir is None:
        from .paths import get_logs_dir  # noqa: PLC0415
        log_path = get_logs_dir()
    else:
        log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(app_name)
    logger.setLevel(logging.DEBUG)
    file_level = logging.DEBUG if verbose else logging.WARNING
    log_file = log_file_path(log_path, app_name).resolve()

    current = None
    for handler in _file_handlers(logger):
        if Path(handler.baseFilename) == log_file:
            current = handler
        else:
            logger.removeHandler(handler)
            handler.close()

    if current is None:
        current = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=MAX_LOG_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding='utf-8',
        )
        current.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(current)
    current.setLevel(file_level)

    # Console: critical errors only (CLI errors are printed by ErrorFormatter)
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.CRITICAL)
        console_handler.setFormatter(logging.Formatter('CRITICAL: %(message)s'))
        logger.addHandler(console_handler)

    return logger

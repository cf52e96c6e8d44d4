import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from .config import get_env_var

DEFAULT_LOG_FORMAT = '%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s'
DEFAULT_LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_basic_logging(level: int | str = logging.INFO,
                        log_format: str = DEFAULT_LOG_FORMAT,
                        date_format: str = DEFAULT_LOG_DATE_FORMAT,
                        logger_instance: Optional[logging.Logger] = None,
                        log_to_file: bool = False,
                        log_dir: str = "logs",
                        console_output: bool = True) -> Optional[Path]:
    """
    Configure logging for SDK users and command-line wrappers.

    Args:
        level: The logging level, as a number or a name such as "DEBUG"
        log_format: The format string for log messages
        date_format: The format string for timestamps in log messages
        logger_instance: An optional specific logger instance to configure
        log_to_file: Whether to also log to a timestamped file under log_dir
        log_dir: Directory for log files
        console_output: Whether to log to stderr

    Returns:
        Path of the log file, if one was created
    """
    env_level = get_env_var("LOG_LEVEL")
    if env_level:
        level = env_level
    if isinstance(level, str):
        level_from_name = logging.getLevelName(level.upper())
        level = level_from_name if isinstance(level_from_name, int) else logging.INFO

    formatter = logging.Formatter(log_format, datefmt=date_format)

    target_logger = logger_instance or logging.getLogger()
    target_logger.handlers = []

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        target_logger.addHandler(console_handler)

    log_filename: Optional[Path] = None
    if log_to_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_filename = log_path / f"indexer_sdk_{timestamp}.log"

        file_handler = logging.FileHandler(log_filename, encoding='utf-8')
        file_handler.setFormatter(formatter)
        target_logger.addHandler(file_handler)

    target_logger.setLevel(level)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    target_logger.debug("Logging configured. Level: %s", logging.getLevelName(level))
    return log_filename

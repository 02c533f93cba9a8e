"""
Logging utility functions for the FakeYou client.

The library itself only creates loggers under the ``fakeyou`` namespace and
never installs handlers; applications call setup_logger to see the output.
"""

# Standard library imports
import functools
import logging
import time
from pathlib import Path
from typing import Any, Callable, Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(
    name: str = "fakeyou",
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    Set up a logger with the given name and level.

    Args:
        name: Logger name
        level: Logging level
        log_file: Path to log file (optional)
        format_string: Format string for log messages (optional)

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def log_execution_time(logger: Optional[logging.Logger] = None) -> Callable:
    """
    Decorator to log the execution time of a function.

    The duration is logged whether the call returns or raises.

    Args:
        logger: Logger to use (optional)

    Returns:
        Decorator function
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            log = logger or logging.getLogger(func.__module__)

            start_time = time.monotonic()
            log.debug(f"Starting {func.__name__}")
            try:
                return func(*args, **kwargs)
            finally:
                execution_time = time.monotonic() - start_time
                log.debug(f"Finished {func.__name__} in {execution_time:.2f} seconds")
        return wrapper
    return decorator

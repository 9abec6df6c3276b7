"""
STEGOCLIENT Logger
Logging setup shared by the CLI, the GUI and the core pipeline.
"""

import logging
import sys
from functools import wraps
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Callable

from config import LOGGING_SETTINGS


def setup_logger(name, level=None):
    """
    Create and configure a logger.

    Args:
        name: logger name (usually ``__name__``)
        level: log level name (defaults to the value in config)

    Returns:
        logging.Logger: Logger object
    """
    logger = logging.getLogger(name)

    # avoid attaching handlers twice
    if logger.handlers:
        return logger

    if level is None:
        level = LOGGING_SETTINGS.get("level", "INFO")
    logger.setLevel(getattr(logging, level))

    log_dir = Path(LOGGING_SETTINGS.get("log_dir", "logs"))
    log_dir.mkdir(exist_ok=True)
    log_file = log_dir / LOGGING_SETTINGS.get("log_file", "app.log")

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=LOGGING_SETTINGS.get("max_bytes", 5_000_000),
        backupCount=LOGGING_SETTINGS.get("backup_count", 5),
        encoding="utf-8",
    )
    file_handler.setLevel(getattr(logging, level))

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, level))

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(formatter)
    console_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger


def log_operation(arg, operation=None, status="SUCCESS", details=None):
    """Decorator/utility for logging the status of an operation.

    Two forms are supported:

    * as a decorator: ``@log_operation("My Task")``
    * as a direct call: ``log_operation(logger, "My Task", status="FAILED")``
    """

    # Decorator usage (argument is the operation name)
    if operation is None and isinstance(arg, str):
        operation_name = arg

        def decorator(func: Callable):
            @wraps(func)
            def wrapper(*args, **kwargs):
                logger = logging.getLogger(func.__module__)
                logger.info(f"[{operation_name}] Started")
                try:
                    result = func(*args, **kwargs)
                except Exception as exc:
                    logger.error(f"[{operation_name}] FAILED: {exc}")
                    raise
                logger.info(f"[{operation_name}] Completed")
                return result

            return wrapper

        return decorator

    # Direct usage (first argument is a logger)
    if operation is not None:
        logger = arg
        msg = f"[{operation}] Status: {status}"
        if details:
            msg += f" | Details: {details}"

        if status and status.upper() == "FAILED":
            logger.error(msg)
        else:
            logger.info(msg)
        return None

    raise TypeError(
        "log_operation must be used as a decorator with an operation name "
        "or called with a logger and an operation name"
    )

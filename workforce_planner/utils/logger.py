"""
Logging setup shared by the analyzers, the snapshot loader and the runners.

Handlers are chosen from the environment when a module first asks for its
logger:
- LOG_TO_CONSOLE (default true): INFO and above to stdout, interleaved with
  the runner's own report output
- LOG_TO_FILE (default false): DEBUG and above to
  ``$LOG_DIR/workforce_planner.log`` plus ERROR and above to
  ``$LOG_DIR/errors.log``; LOG_DIR defaults to ``logs``
- LOG_LEVEL (default INFO): threshold of the logger itself

With both outputs switched off a NullHandler is attached so library use stays
silent. The ``log_*`` helpers give analysis steps, validation outcomes and
loaded tables a uniform message shape.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
import os


def setup_logger(
    name: str,
    level: str = "INFO",
    log_to_file: bool = True,
    log_to_console: bool = True
) -> logging.Logger:
    """
    Set up a logger with consistent formatting and handlers.

    Args:
        name: Logger name (typically __name__ from calling module)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Whether to write logs to file
        log_to_console: Whether to write logs to console

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers if logger already configured
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(logging.INFO)
        logger.addHandler(console_handler)

    if log_to_file:
        log_dir = Path(os.getenv('LOG_DIR', 'logs'))
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_dir / "workforce_planner.log")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.DEBUG)
        logger.addHandler(file_handler)

        # Error-only log file
        error_handler = logging.FileHandler(log_dir / "errors.log")
        error_handler.setFormatter(formatter)
        error_handler.setLevel(logging.ERROR)
        logger.addHandler(error_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with default configuration.

    Args:
        name: Logger name (typically __name__ from calling module)

    Returns:
        Configured logger instance
    """
    log_level = os.getenv('LOG_LEVEL', 'INFO')
    log_to_file = os.getenv('LOG_TO_FILE', 'false').lower() == 'true'
    log_to_console = os.getenv('LOG_TO_CONSOLE', 'true').lower() == 'true'

    return setup_logger(
        name=name,
        level=log_level,
        log_to_file=log_to_file,
        log_to_console=log_to_console
    )


def log_function_entry(logger: logging.Logger, func_name: str, **kwargs):
    """
    Log function entry with parameters.

    Args:
        logger: Logger instance
        func_name: Function name
        **kwargs: Function parameters to log
    """
    params = ", ".join([f"{k}={v}" for k, v in kwargs.items()])
    logger.debug(f"Entering {func_name}({params})")


def log_function_exit(logger: logging.Logger, func_name: str, result: Optional[str] = None):
    """
    Log function exit with optional result summary.

    Args:
        logger: Logger instance
        func_name: Function name
        result: Optional result summary
    """
    if result:
        logger.debug(f"Exiting {func_name}: {result}")
    else:
        logger.debug(f"Exiting {func_name}")


def log_data_summary(logger: logging.Logger, data_name: str, count: int, summary: str = ""):
    """
    Log data loading/processing summary.

    Args:
        logger: Logger instance
        data_name: Name of the data being processed
        count: Number of records/items
        summary: Optional summary description
    """
    message = f"Loaded {data_name}: {count} records"
    if summary:
        message += f" - {summary}"
    logger.info(message)


def log_analysis_progress(logger: logging.Logger, stage: str, progress: str):
    """
    Log analysis progress updates.

    Args:
        logger: Logger instance
        stage: Current analysis stage
        progress: Progress description
    """
    logger.info(f"[{stage}] {progress}")


def log_validation_result(logger: logging.Logger, validation_type: str, passed: bool, details: str = ""):
    """
    Log validation results consistently.

    Args:
        logger: Logger instance
        validation_type: Type of validation performed
        passed: Whether validation passed
        details: Additional validation details
    """
    status = "PASSED" if passed else "FAILED"
    message = f"Validation {validation_type}: {status}"
    if details:
        message += f" - {details}"

    if passed:
        logger.info(message)
    else:
        logger.warning(message)

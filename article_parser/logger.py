"""
Logging configuration for the article parser.
"""

import logging
import sys
from typing import Optional


def setup_logger(
    name: str = "article_parser",
    level: int = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up and return a logger instance.

    Args:
        name: Logger name
        level: Logging level (default: INFO)
        log_file: Optional file path for logging

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Handlers are attached once; later calls only see the existing logger
    if logger.handlers:
        return logger

    logger.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def set_level(level: int, name: str = "article_parser") -> None:
    """Change the level of an already configured logger and its handlers."""
    logger = setup_logger(name=name, level=level)
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


# Default logger instance
logger = setup_logger()


def get_module_logger(module_name: str) -> logging.Logger:
    """
    Get a child logger for a specific module.

    Child loggers (e.g. "article_parser.guardian") propagate to the package
    logger, so the module name shows up in output without extra handlers.

    Args:
        module_name: Name of the module (e.g., 'main', 'mirror')

    Returns:
        Child logger instance
    """
    return logging.getLogger(f"article_parser.{module_name}")

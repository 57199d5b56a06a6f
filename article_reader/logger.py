"""
Logging configuration for the article reader.
"""

import logging
import sys
from typing import Optional


def setup_logger(
    name: str = "article_reader",
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

    # Calling again only adjusts the level; handlers are attached once
    if logger.handlers:
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
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


def get_module_logger(module_name: str) -> logging.Logger:
    """
    Get a child logger for a pipeline stage.

    Child loggers (e.g. "article_reader.scorer") propagate to the
    "article_reader" logger, so configuring that one with setup_logger()
    covers every stage while log lines still name the stage they came from.

    Args:
        module_name: Name of the stage (e.g., 'preprocessor', 'scorer')

    Returns:
        Child logger instance
    """
    return logging.getLogger(f"article_reader.{module_name}")

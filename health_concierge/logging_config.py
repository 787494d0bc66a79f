"""Logging configuration for the Health Concierge server."""

import logging
import sys

logger = logging.getLogger("health_concierge")


def configure_logging(level: int = logging.INFO) -> None:
    """Set up logging configuration."""

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear all existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    formatter = logging.Formatter(
        '[%(asctime)s][%(levelname)s] %(message)s'
    )
    console_handler.setFormatter(formatter)

    root_logger.addHandler(console_handler)

    # Package logger writes once, without bubbling to the root handler
    logger.handlers.clear()
    logger.addHandler(console_handler)
    logger.setLevel(level)
    logger.propagate = False

    # Third-party chatter
    for logger_name in ['httpx', 'httpcore']:
        logging.getLogger(logger_name).setLevel(logging.WARNING)


def get_logger(name: str = "health_concierge") -> logging.Logger:
    """Get logger instance."""
    return logging.getLogger(name)

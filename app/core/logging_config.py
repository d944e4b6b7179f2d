"""
Logging configuration.

``setup_logging`` attaches a console handler to the root logger the first
time it is called. Modules log through ``logging.getLogger(__name__)``.
"""

import logging
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger once.

    Args:
        level: Logging level name, case insensitive
        logfile: Optional path for an additional file handler
    """
    logger = logging.getLogger()
    if logger.handlers:
        # Already configured (uvicorn reload, repeated imports in tests)
        return

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(logfile, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

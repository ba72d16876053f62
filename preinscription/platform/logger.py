import logging
import os
from logging.handlers import RotatingFileHandler

PACKAGE_LOGGER = "preinscription"
LOG_FILE_NAME = "preinscription.log"


def configure_logging(level: str = "INFO", log_dir: str = "logs") -> logging.Logger:
    """
    Sets up the package logger so it writes to console AND a file.

    Every module logger obtained through ``get_logger(__name__)`` propagates
    here. An empty ``log_dir`` keeps logging console-only.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level.upper())

    if logger.handlers:
        return logger

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, LOG_FILE_NAME), maxBytes=10_000_000, backupCount=5
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)

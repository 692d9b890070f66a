import logging
import os
from logging.handlers import RotatingFileHandler

LOGGER_NAME = 'routewise.api'


def setup_api_logger(log_path: str | None = None) -> logging.Logger:
    """Setup and return the application-wide API logger.

    Creates a rotating file handler at `log_path` (defaults to ./logs/api.log).
    Module loggers are children of it (`routewise.api.store`, ...) and
    propagate their records here.
    """
    if log_path is None:
        base = os.path.abspath(os.path.dirname(__file__))
        log_path = os.path.join(base, '..', 'logs', 'api.log')
    os.makedirs(os.path.dirname(os.path.abspath(log_path)), exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)

    # one file handler at a time; a new path replaces the old one
    log_path = os.path.abspath(log_path)
    for existing in list(logger.handlers):
        if isinstance(existing, RotatingFileHandler) and existing.baseFilename != log_path:
            logger.removeHandler(existing)
            existing.close()

    if not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        handler = RotatingFileHandler(log_path, maxBytes=5 * 1024 * 1024, backupCount=5, encoding='utf-8')
        formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{LOGGER_NAME}.{name}")

'''
Application-wide logger, shared by every module through `log`.
'''
import logging
import sys

from .config import settings

LOGGER_NAME = 'SF-backend'
LOG_FORMAT = '%(asctime)s | %(levelname)-7s | %(module)s:%(lineno)d | %(message)s'

def setup_logger(level: str = settings.LOG_LEVEL) -> logging.Logger:
    """
    Returns the 'SF-backend' logger writing to stdout at the given level.
    Calling it again only updates the level; the handler is attached once.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger

log = setup_logger()

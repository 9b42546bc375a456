# core/log_manager.py
import logging
import sys

from tango.config import LOG_LEVEL

LOGGER_NAME = 'tango'
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def get_logger() -> logging.Logger:
    """
    Returns the shared application logger, attaching a stream handler on first use.
    Calling it repeatedly never stacks handlers.
    """
    log = logging.getLogger(LOGGER_NAME)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)
        log.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    return log


logger = get_logger()

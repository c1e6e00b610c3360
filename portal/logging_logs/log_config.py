"""
Logging configuration for the admin portal.
Centralizes all logging setup to follow DRY and SoC principles.
"""
import os
import time
import logging
from logging.handlers import RotatingFileHandler

from portal.config.settings import LogConfig

ROOT_LOGGER_NAME = "portal"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


# Filter to prevent duplicate log messages
class DuplicateFilter(logging.Filter):
    def __init__(self, name=''):
        super().__init__(name)
        self.last_log = None
        self.last_time = 0

    def filter(self, record):
        current_log = (record.msg, record.args)
        current_time = time.time()

        # Same message within 0.1 seconds is dropped
        if current_log == self.last_log and current_time - self.last_time < 0.1:
            return False

        self.last_log = current_log
        self.last_time = current_time
        return True


def setup_logging(log_to_file=True):
    """
    Set up logging for the portal package.

    Every module logs through ``logging.getLogger(__name__)``, so configuring
    the ``portal`` logger once covers the whole package.

    Args:
        log_to_file: Attach the rotating file handler as well as the console one

    Returns:
        The configured ``portal`` logger
    """
    # Suppress MongoDB connection messages
    logging.getLogger('pymongo').setLevel(logging.WARNING)

    logger = logging.getLogger(ROOT_LOGGER_NAME)

    # Only configure if handlers haven't been added yet
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, LogConfig.LOG_LEVEL.upper(), logging.INFO))
    formatter = logging.Formatter(LOG_FORMAT)
    duplicate_filter = DuplicateFilter()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.addFilter(duplicate_filter)
    logger.addHandler(console_handler)

    if log_to_file:
        try:
            os.makedirs(LogConfig.LOG_DIR, exist_ok=True)
            # delay=True avoids opening the file until the first record
            file_handler = RotatingFileHandler(
                os.path.join(LogConfig.LOG_DIR, LogConfig.LOG_FILE),
                maxBytes=LogConfig.MAX_LOG_SIZE,
                backupCount=LogConfig.BACKUP_COUNT,
                delay=True
            )
            file_handler.setFormatter(formatter)
            file_handler.addFilter(duplicate_filter)
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"Could not set up file logging: {str(e)}")

    return logger

import logging
import sys

LOG_FORMAT = "[%(asctime)s] [%(levelname)-8s] [%(module)-15s] - %(message)s"


def setup_logger(level: int = logging.INFO) -> None:
    """Send log records to stdout; ``level`` DEBUG shows every dictionary."""
    logger = logging.getLogger()
    logger.setLevel(level)

    if logger.hasHandlers():
        logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    logger.addHandler(handler)

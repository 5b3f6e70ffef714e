import logging
from enum import StrEnum

LOG_FORMAT_DEBUG = "%(levelname)s - %(message)s - %(pathname)s - %(funcName)s %(lineno)d"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Client libraries that log every request at INFO
NOISY_LOGGERS = ("httpx", "urllib3", "google.auth", "grpc", "sqlalchemy.engine")

class LogLevels(StrEnum):
    debug = "DEBUG"
    info = "INFO"
    warn = "WARNING"
    error = "ERROR"

def configure_logging(log_level: str = LogLevels.error, debug: bool = False):
    """
    Configure the root logger.
    `debug` forces DEBUG with source locations and leaves client libraries
    at their own levels; otherwise those are held at WARNING.
    """
    log_level = LogLevels.debug if debug else str(log_level).upper()
    valid_levels = [level.value for level in LogLevels]

    if log_level not in valid_levels:
        logging.basicConfig(level=logging.ERROR)
        return

    level_map = {
        LogLevels.debug: logging.DEBUG,
        LogLevels.info: logging.INFO,
        LogLevels.warn: logging.WARNING,
        LogLevels.error: logging.ERROR,
    }

    if log_level == LogLevels.debug:
        logging.basicConfig(level=level_map[LogLevels.debug], format=LOG_FORMAT_DEBUG)
        return

    logging.basicConfig(level=level_map[log_level], format=LOG_FORMAT)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

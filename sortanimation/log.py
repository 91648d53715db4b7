"""
Logging
Wires the ``sortanimation`` logger for a driver embedding the engine. The
runner thread name is part of every record, since events are produced on
the session's background thread while the driver logs from its own.
"""
import logging
import sys
from typing import Optional, Union

from .errors import ConfigurationError
from .settings import LOG_DATEFMT, LOG_FORMAT, LOG_LEVEL, LOGGER_NAME


def setup_logging(level: Union[int, str] = LOG_LEVEL, log_file: Optional[str] = None,
                  stream=None) -> logging.Logger:
    """
    Attach handlers to the package logger and return it.

    ``level`` is a logging constant or a level name ("DEBUG"). Records go to
    ``stream`` (stdout by default) and, when given, to ``log_file``.
    Calling again replaces the handlers from the previous call.
    """
    if isinstance(level, str):
        name, level = level, logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ConfigurationError(f"Unknown log level: {name!r}")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)
    handlers = [logging.StreamHandler(stream or sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging configured at %s", logging.getLevelName(level))
    return logger

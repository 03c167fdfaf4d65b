"""
Logging Configuration
Sets up the package logger for the command-line tool.

Library warnings (numpy overflow on extreme measurements, meshio while
reading OBJ files) are captured and written through the same handlers.
"""
import logging
import sys
from typing import List, Optional

PACKAGE_LOGGER = "bodyscribe"
WARNINGS_LOGGER = "py.warnings"


def _build_handlers(level: int, log_file: Optional[str]) -> List[logging.Handler]:
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the 'bodyscribe' logger and routes `warnings` into it.

    The library itself never calls this; only entry points do. Calling it
    again replaces the handlers of the previous call.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    warnings_logger = logging.getLogger(WARNINGS_LOGGER)
    handlers = _build_handlers(level, log_file)

    for target in (logger, warnings_logger):
        for handler in list(target.handlers):
            handler.close()
            target.removeHandler(handler)
        for handler in handlers:
            target.addHandler(handler)
    logger.setLevel(level)
    warnings_logger.propagate = False
    logging.captureWarnings(True)

    logger.debug("Logging initialized.")
    return logger

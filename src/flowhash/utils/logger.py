"""Logging setup."""

import logging
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(
    name: str,
    log_file: Optional[Union[str, Path]] = None,
    level: int = logging.INFO,
) -> logging.Logger:
    """Get a configured logger.

    Attaches a stream handler, and a file handler when log_file is given,
    only the first time a logger is requested so repeated calls do not
    duplicate output.

    Args:
        name: Logger name (usually __name__)
        log_file: Optional path of a file to also log to
        level: Logging level

    Returns:
        Configured logging.Logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        formatter = logging.Formatter(LOG_FORMAT)

        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

        if log_file is not None:
            log_file = Path(log_file)
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

        # handled here; don't repeat through the root logger
        logger.propagate = False

    return logger

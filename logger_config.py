import logging
import os
from typing import Optional

FORMATTER = logging.Formatter('%(asctime)s [%(levelname)s] %(message)s')


def setup_logger(name: str = "holefinder",
                 level: int = logging.WARNING,
                 log_file: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # FileHandler subclasses StreamHandler, so compare exact types
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        # stderr, so reports on stdout stay clean
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(FORMATTER)
        logger.addHandler(console_handler)

    if log_file:
        path = os.path.abspath(log_file)
        if not any(
            isinstance(h, logging.FileHandler) and h.baseFilename == path
            for h in logger.handlers
        ):
            file_handler = logging.FileHandler(path)
            file_handler.setFormatter(FORMATTER)
            logger.addHandler(file_handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger

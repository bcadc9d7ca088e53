import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(
    name: Optional[str] = None,
    log_file: Optional[str] = None,
    level: Union[int, str] = logging.INFO,
    log_dir: str = 'logs',
) -> logging.Logger:
    """Setup a logger with a console handler and an optional rotating file handler"""

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    formatter = logging.Formatter(LOG_FORMAT)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid duplicate handlers if setup is called multiple times
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        if not os.path.exists(log_dir):
            os.makedirs(log_dir)

        # Rotating File Handler: 10MB per file, keep 5 old files
        handler = RotatingFileHandler(
            os.path.join(log_dir, log_file),
            maxBytes=10*1024*1024,
            backupCount=5
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger

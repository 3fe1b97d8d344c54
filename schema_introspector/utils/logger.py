"""
Logging setup shared by the CLI and library users
"""

import logging
import sys


def setup_logger(name: str = 'schema_introspector', level: int = logging.INFO) -> logging.Logger:
    """Attach a single stderr handler to the named logger"""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger

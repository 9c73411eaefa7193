"""
Logging setup: one console handler on the root logger.

Modules log through ``logging.getLogger(__name__)``; this only decides
level and format.
"""

import logging
import sys


def setup_logging(log_level: int | str = "INFO") -> None:
    """Configure the root logger once per process."""
    if isinstance(log_level, int):
        level = log_level
    else:
        level = getattr(logging, str(log_level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Replace handlers so repeated app factories don't duplicate output
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(console_handler)

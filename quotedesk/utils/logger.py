"""
Logging configuration
"""
import logging
import sys
from typing import Optional

from quotedesk.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
ROOT_LOGGER = "quotedesk"


def setup_logging(debug: Optional[bool] = None) -> logging.Logger:
    """Attach a stdout handler to the package logger (once).

    Module loggers created with logging.getLogger(__name__) propagate here.
    """
    if debug is None:
        debug = get_settings().DEBUG

    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    root.setLevel(logging.DEBUG if debug else logging.INFO)
    return root


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the package namespace with logging configured"""
    setup_logging()
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)

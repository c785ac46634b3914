import logging
import os

__all__ = ["get_logger"]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
ROOT_LOGGER = "csvjson"


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if root.handlers:
        return root

    root.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    sh = logging.StreamHandler()
    sh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
    root.addHandler(sh)
    # the package handler is the only one that prints csvjson records
    root.propagate = False
    return root


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Return a logger under the package logger, which carries the only handler.

    Configure via LOG_LEVEL env var.
    """
    _configure_root()
    return logging.getLogger(name)

"""
Logging for the vote boost toolkit.

Every module logs through a child of the ``vote_boost_toolkit`` logger.
The console handler is attached once to that package logger, so records
from the aligner, fetcher and strategy share one format and one level.
The level comes from VB_LOG_LEVEL and can be changed at runtime with
``set_log_level`` (the CLI ``--log-level`` flag).
"""

import logging
import os
from typing import Optional, Union

ROOT_LOGGER_NAME = "vote_boost_toolkit"
_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _parse_level(level: Union[int, str, None]) -> int:
    if isinstance(level, int):
        return level
    name = (level or "INFO").upper()
    return getattr(logging, name, logging.INFO)


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
        root.addHandler(handler)
        root.setLevel(_parse_level(os.getenv("VB_LOG_LEVEL")))
    return root


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the package namespace.

    Names outside ``vote_boost_toolkit`` (such as ``__main__``) are nested
    below it so they pick up the package handler.
    """
    _configure_root()
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def set_log_level(level: Union[int, str]) -> None:
    """Set the level of every toolkit logger; unknown names fall back to INFO."""
    _configure_root().setLevel(_parse_level(level))

"""
Logging setup for the API.

``setup_logging`` attaches a console handler, and a file handler when
``LOG_FILE`` is set, to the root logger.  It is a no-op once the root
logger has handlers, which is the case under uvicorn's own log config
and on repeated ``create_app`` calls in tests.  Level and file default
to the values in ``settings``; ``DEBUG=true`` forces the DEBUG level.
"""

import logging
from pathlib import Path
from typing import Optional

from .config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(level: Optional[str] = None) -> int:
    """Map a level name to its numeric value, falling back to settings then INFO."""
    if level is None:
        level = "DEBUG" if settings.debug else settings.log_level
    return getattr(logging, level.upper(), logging.INFO)


def setup_logging(level: Optional[str] = None, logfile: Optional[str] = None) -> None:
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(resolve_level(level))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    logfile = logfile if logfile is not None else (settings.log_file or None)
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

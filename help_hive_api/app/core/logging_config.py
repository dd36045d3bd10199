"""
Logging configuration for the API process.

``setup_logging`` attaches a single console handler (and optionally a
file handler) to the root logger.  Requests are logged by the
middleware in ``main`` under ``help_hive_api.requests``, so Uvicorn's
own access log is silenced to avoid a duplicate line per request, and
the MongoDB driver is limited to warnings.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

QUIET_LOGGERS = {
    "pymongo": logging.WARNING,
    "uvicorn.access": logging.WARNING,
}


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger once.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Optional path of a file that receives the same records.
    """
    root = logging.getLogger()
    if any(getattr(h, "_help_hive", False) for h in root.handlers):
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        handler._help_hive = True
        root.addHandler(handler)

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)

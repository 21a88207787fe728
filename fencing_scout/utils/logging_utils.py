"""Logging helpers for the Fencing Scout application."""
import logging
from pathlib import Path
from typing import Dict, Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_LOGGERS: Dict[str, logging.Logger] = {}
_ROOT_NAME = "fencing_scout"


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the application root logger.

    Parameters:
    - level: logging level name (DEBUG, INFO, ...)
    - log_file: optional path of a log file written alongside the console
    """
    root = logging.getLogger(_ROOT_NAME)
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    """
    Create or retrieve a named logger under the application namespace.

    Parameters:
    - name: logger namespace (e.g. services.persistence, ui.web_app)
    """
    if name in _LOGGERS:
        return _LOGGERS[name]

    logger = logging.getLogger(f"{_ROOT_NAME}.{name}")
    _LOGGERS[name] = logger
    return logger

"""Runtime configuration for the Fencing Scout application."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .constants import SAVE_DEBOUNCE_SECONDS
from .logging_utils import get_logger

log = get_logger("utils.config")

ENV_PREFIX = "FENCING_SCOUT_"


@dataclass
class AppConfig:
    """
    Settings for the web server and the persistence layer.

    Attributes:
        host: Address the web server binds to
        port: Port the web server listens on
        store_dir: Base directory of the JSON file document store
        store_url: Base URL of a remote document store; overrides store_dir
        save_delay: Quiet period before a debounced save is written
        log_level: Logging level name
        log_file: Optional log file path
    """
    host: str = "127.0.0.1"
    port: int = 7122
    store_dir: str = "data"
    store_url: Optional[str] = None
    save_delay: float = SAVE_DEBOUNCE_SECONDS
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """
        Build a configuration from ``FENCING_SCOUT_*`` environment variables.

        Unparseable numeric values fall back to their defaults.
        """
        env = os.environ if environ is None else environ
        defaults = AppConfig()

        def _get(key: str) -> Optional[str]:
            value = env.get(ENV_PREFIX + key)
            if value is None or not value.strip():
                return None
            return value.strip()

        port = defaults.port
        raw_port = _get("PORT")
        if raw_port is not None:
            try:
                port = int(raw_port)
            except ValueError:
                log.warning(f"Invalid {ENV_PREFIX}PORT={raw_port!r}; using {defaults.port}")

        save_delay = defaults.save_delay
        raw_delay = _get("SAVE_DELAY")
        if raw_delay is not None:
            try:
                save_delay = max(0.0, float(raw_delay))
            except ValueError:
                log.warning(f"Invalid {ENV_PREFIX}SAVE_DELAY={raw_delay!r}; using {defaults.save_delay}")

        return AppConfig(
            host=_get("HOST") or defaults.host,
            port=port,
            store_dir=_get("STORE_DIR") or defaults.store_dir,
            store_url=_get("STORE_URL"),
            save_delay=save_delay,
            log_level=_get("LOG_LEVEL") or defaults.log_level,
            log_file=_get("LOG_FILE"),
        )

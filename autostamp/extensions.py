# autostamp/extensions.py

from __future__ import annotations

import logging

from flask import Flask

from .config import load_config
from .db import reset_engine
from .db.registry import TimestampConfig, configure_defaults
from .logger_config import setup_logger

log = logging.getLogger(__name__)


def init_app(app: Flask, load_env: bool = True) -> TimestampConfig:
    """Bind autostamp to a Flask app.

    Reads the stamping settings from ``app.config`` (optionally loading them
    from the environment first) and installs them as the process defaults.
    The effective config is kept in ``app.extensions["autostamp"]``.
    """
    if load_env:
        load_config(app)

    level = app.config.get("LOG_LEVEL") or None
    log_file = app.config.get("LOG_FILE") or None
    if level or log_file:
        setup_logger(level=level or "INFO", log_file=log_file)

    config = configure_defaults(TimestampConfig(
        record_timestamps=app.config.get("RECORD_TIMESTAMPS", True),
        default_timezone=app.config.get("DEFAULT_TIMEZONE", "utc"),
        partial_writes=app.config.get("PARTIAL_WRITES", True),
        local_timezone=app.config.get("TIMEZONE") or None,
    ))
    app.extensions["autostamp"] = config

    # Next get_engine() call picks up this app's DATABASE_URL.
    reset_engine()
    log.info("autostamp initialised for %s", app.name)
    return config

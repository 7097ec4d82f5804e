# autostamp/config.py

import os
from dotenv import load_dotenv

from .db.registry import TimestampConfig
from .exceptions import ConfigurationError
from .utils.timez import normalize_timezone_mode

# Load .env before anything reads os.environ
load_dotenv()

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(name, raw)


class BaseConfig:
    DATABASE_URL = ''
    # Zone used when DEFAULT_TIMEZONE is "local"; empty means the system zone
    TIMEZONE = ''

    RECORD_TIMESTAMPS = True
    DEFAULT_TIMEZONE = 'utc'
    PARTIAL_WRITES = True

    # Both empty: leave logging to the host application
    LOG_LEVEL = ''
    LOG_FILE = ''


class DevConfig(BaseConfig):
    DEBUG = True


class ProdConfig(BaseConfig):
    DEBUG = False


def load_config(app):
    """Load configuration into a Flask app based on FLASK_ENV and the environment."""
    env = os.getenv("FLASK_ENV", "development").lower()
    if env == "production":
        app.config.from_object(ProdConfig)
    else:
        app.config.from_object(DevConfig)

    # Environment values override the class defaults.
    app.config.update(
        DATABASE_URL=os.getenv('DATABASE_URL', app.config['DATABASE_URL']),
        TIMEZONE=os.getenv('TIMEZONE', app.config['TIMEZONE']),
        RECORD_TIMESTAMPS=env_bool('RECORD_TIMESTAMPS', app.config['RECORD_TIMESTAMPS']),
        DEFAULT_TIMEZONE=normalize_timezone_mode(os.getenv('DEFAULT_TIMEZONE', app.config['DEFAULT_TIMEZONE'])),
        PARTIAL_WRITES=env_bool('PARTIAL_WRITES', app.config['PARTIAL_WRITES']),
        LOG_LEVEL=os.getenv('LOG_LEVEL', app.config['LOG_LEVEL']).upper(),
        LOG_FILE=os.getenv('LOG_FILE', app.config['LOG_FILE']),
    )


def settings_from_env():
    """Build a TimestampConfig from environment variables, for use without Flask."""
    return TimestampConfig(
        record_timestamps=env_bool('RECORD_TIMESTAMPS', BaseConfig.RECORD_TIMESTAMPS),
        default_timezone=os.getenv('DEFAULT_TIMEZONE', BaseConfig.DEFAULT_TIMEZONE),
        partial_writes=env_bool('PARTIAL_WRITES', BaseConfig.PARTIAL_WRITES),
        local_timezone=os.getenv('TIMEZONE', BaseConfig.TIMEZONE) or None,
    )

# autostamp/__init__.py

from .db import Base, get_engine, get_session, make_session_factory
from .db.persistence import create, duplicate, touch, update
from .db.record import Record, SQLAlchemyRecord
from .db.registry import (
    TimestampConfig,
    config_for,
    configure_defaults,
    default_config,
    is_timestamped,
    set_record_timestamps,
    timestamped,
)
from .db.timestamps import (
    clear_timestamp_attributes,
    install,
    max_updated_timestamp,
    on_create,
    on_update,
)
from .exceptions import ConfigurationError, TimestampConversionError
from .utils.timez import current_time, now_local, to_time

__version__ = "0.1.0"

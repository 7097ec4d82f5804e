"""Per-type timestamp configuration.

Mapped classes opt in with the ``timestamped`` decorator, which attaches an
immutable ``TimestampConfig`` as ``__timestamp_config__``. Fields left as
``None`` on that config inherit the process defaults at lookup time, so a
model module can be imported before the application has loaded its
settings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import Optional

from sqlalchemy import inspect

from ..utils.timez import UTC, normalize_timezone_mode

logger = logging.getLogger(__name__)

CONFIG_ATTR = "__timestamp_config__"

# Keys stored in a mapped instance's InstanceState.info
RECORD_TIMESTAMPS_OPTION = "autostamp.record_timestamps"
TOUCH_OPTION = "autostamp.touch"


@dataclass(frozen=True)
class TimestampConfig:
    record_timestamps: Optional[bool] = None
    default_timezone: Optional[str] = None
    partial_writes: Optional[bool] = None
    local_timezone: Optional[str] = None

    def __post_init__(self):
        if self.default_timezone is not None:
            object.__setattr__(self, "default_timezone", normalize_timezone_mode(self.default_timezone))

    def resolve(self, defaults: "TimestampConfig") -> "TimestampConfig":
        """Fill every unset field from ``defaults``."""
        missing = {
            f.name: getattr(defaults, f.name)
            for f in fields(self)
            if getattr(self, f.name) is None
        }
        return replace(self, **missing) if missing else self


BUILTIN_DEFAULTS = TimestampConfig(
    record_timestamps=True,
    default_timezone=UTC,
    partial_writes=True,
    local_timezone=None,
)

_defaults: TimestampConfig = BUILTIN_DEFAULTS


def default_config() -> TimestampConfig:
    return _defaults


def configure_defaults(config: TimestampConfig) -> TimestampConfig:
    """Replace the process-wide defaults. Unset fields fall back to the built-in ones."""
    global _defaults
    _defaults = config.resolve(BUILTIN_DEFAULTS)
    logger.info(
        "Timestamp defaults: record_timestamps=%s default_timezone=%s partial_writes=%s",
        _defaults.record_timestamps, _defaults.default_timezone, _defaults.partial_writes,
    )
    return _defaults


def _class_of(obj):
    return obj if isinstance(obj, type) else type(obj)


def is_timestamped(obj) -> bool:
    return getattr(_class_of(obj), CONFIG_ATTR, None) is not None


def config_for(obj) -> TimestampConfig:
    """Effective config for a mapped class or instance."""
    own = getattr(_class_of(obj), CONFIG_ATTR, None)
    if own is None:
        return _defaults
    return own.resolve(_defaults)


def timestamped(cls=None, *, record_timestamps=None, default_timezone=None,
                partial_writes=None, local_timezone=None):
    """Mark a mapped class for automatic created_*/updated_* stamping.

    Usable bare (``@timestamped``) or with overrides
    (``@timestamped(default_timezone="local")``).
    """
    config = TimestampConfig(
        record_timestamps=record_timestamps,
        default_timezone=default_timezone,
        partial_writes=partial_writes,
        local_timezone=local_timezone,
    )

    def decorate(klass):
        setattr(klass, CONFIG_ATTR, config)
        logger.debug("Registered %s for timestamping (%s)", klass.__name__, config)
        return klass

    if cls is not None:
        return decorate(cls)
    return decorate


def set_record_timestamps(instance, enabled: Optional[bool]) -> None:
    """Turn stamping on/off for one instance; ``None`` reverts to the type's setting."""
    info = inspect(instance).info
    if enabled is None:
        info.pop(RECORD_TIMESTAMPS_OPTION, None)
    else:
        info[RECORD_TIMESTAMPS_OPTION] = bool(enabled)

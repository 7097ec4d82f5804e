# autostamp/db/timestamps.py
"""
Automatic created_*/updated_* stamping.

A record whose table has ``created_at``/``created_on`` columns gets them
filled in right before it is inserted, and ``updated_at``/``updated_on``
are refreshed right before each update. Stamping can be switched off per
type (``@timestamped(record_timestamps=False)``), per instance
(``set_record_timestamps``) or per update (``update(..., touch=False)``).

Times are UTC unless the type's ``default_timezone`` is ``"local"``.
"""

from __future__ import annotations

import logging
import weakref
from typing import Iterable

from sqlalchemy import event, inspect

from . import Base
from .record import Record, SQLAlchemyRecord
from .registry import TOUCH_OPTION, is_timestamped
from ..utils.timez import current_time, to_time

logger = logging.getLogger(__name__)

TIMESTAMP_ATTRIBUTES_FOR_CREATE = ("created_at", "created_on")
TIMESTAMP_ATTRIBUTES_FOR_UPDATE = ("updated_at", "updated_on")
ALL_TIMESTAMP_ATTRIBUTES = TIMESTAMP_ATTRIBUTES_FOR_CREATE + TIMESTAMP_ATTRIBUTES_FOR_UPDATE


def timestamp_attributes_for_create_in_model(record: Record) -> list[str]:
    return [name for name in TIMESTAMP_ATTRIBUTES_FOR_CREATE if record.column_exists(name)]


def timestamp_attributes_for_update_in_model(record: Record) -> list[str]:
    return [name for name in TIMESTAMP_ATTRIBUTES_FOR_UPDATE if record.column_exists(name)]


def all_timestamp_attributes_in_model(record: Record) -> list[str]:
    return timestamp_attributes_for_create_in_model(record) + timestamp_attributes_for_update_in_model(record)


def current_time_for(record: Record):
    return current_time(record.default_timezone, record.local_timezone)


def on_create(record: Record) -> None:
    """Fill unset creation columns just before the first write."""
    if not record.record_timestamps:
        return

    now = current_time_for(record)
    for name in TIMESTAMP_ATTRIBUTES_FOR_CREATE:
        if record.column_exists(name) and not record.has_explicit_value(name):
            record.set_attribute(name, now)
            logger.debug("%r: stamped %s=%s", record, name, now)


def should_record_timestamps(record: Record) -> bool:
    # With partial writes an update that changes nothing must not become a timestamp-only write.
    return record.record_timestamps and (not record.partial_writes or record.has_changes())


def on_update(record: Record, touch: bool = True) -> None:
    """Refresh update columns just before an update write."""
    if not (touch and should_record_timestamps(record)):
        return

    now = current_time_for(record)
    for name in TIMESTAMP_ATTRIBUTES_FOR_UPDATE:
        if not record.column_exists(name):
            continue
        if record.is_changed(name):
            logger.debug("%r: kept caller-set %s", record, name)
            continue
        record.set_attribute(name, now)
        logger.debug("%r: stamped %s=%s", record, name, now)


def clear_timestamp_attributes(record: Record) -> None:
    """Unset every timestamp column on a freshly duplicated record."""
    for name in all_timestamp_attributes_in_model(record):
        record.set_attribute(name, None)
        record.clear_change_tracking([name])
    logger.debug("%r: cleared timestamp attributes", record)


def max_updated_timestamp(record: Record, names: Iterable[str] = TIMESTAMP_ATTRIBUTES_FOR_UPDATE):
    """Latest of the given timestamp attributes, or ``None`` if none hold a value."""
    values = []
    for name in names:
        if record.column_exists(name):
            value = record.get_attribute(name)
        else:
            value = record.get_attribute_if_present(name)
        if value is not None:
            values.append(to_time(value))
    return max(values) if values else None


# -------------------------
# SQLAlchemy mapper hooks
# -------------------------
_installed = weakref.WeakSet()


def _before_insert(mapper, connection, target):
    if is_timestamped(target):
        on_create(SQLAlchemyRecord(target))


def _before_update(mapper, connection, target):
    if is_timestamped(target):
        touch = inspect(target).info.get(TOUCH_OPTION, True)
        on_update(SQLAlchemyRecord(target), touch=touch)


def install(base) -> None:
    """Attach the insert/update hooks to ``base`` and every class mapped from it."""
    if base in _installed:
        return
    event.listen(base, "before_insert", _before_insert, propagate=True)
    event.listen(base, "before_update", _before_update, propagate=True)
    _installed.add(base)
    logger.info("Timestamp hooks installed on %s", getattr(base, "__name__", base))


install(Base)

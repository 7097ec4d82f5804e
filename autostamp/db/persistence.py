"""
Persistence entry points that carry per-call options into the timestamp hooks.

``update(..., touch=False)`` is the silent-update path: the values are
written but ``updated_at``/``updated_on`` are left alone. The option only
lives on the instance for the duration of the flush.
"""

from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import flag_dirty

from .record import SQLAlchemyRecord
from .registry import TOUCH_OPTION
from .timestamps import clear_timestamp_attributes, current_time_for, timestamp_attributes_for_update_in_model

logger = logging.getLogger(__name__)


def create(session: Session, instance):
    session.add(instance)
    session.flush()
    return instance


def update(session: Session, instance, touch: bool = True, **values):
    """Assign ``values`` to ``instance`` and flush, optionally without touching update stamps."""
    for key, value in values.items():
        setattr(instance, key, value)

    # Without partial writes an unchanged instance still goes through the update hook
    if touch and not SQLAlchemyRecord(instance).partial_writes:
        flag_dirty(instance)

    info = inspect(instance).info
    info[TOUCH_OPTION] = touch
    try:
        session.flush()
    finally:
        info.pop(TOUCH_OPTION, None)
    return instance


def touch(session: Session, instance):
    """Refresh update stamps even when nothing else changed."""
    record = SQLAlchemyRecord(instance)
    names = timestamp_attributes_for_update_in_model(record)
    if not names:
        logger.debug("%r: no update timestamp columns to touch", record)
        return instance

    now = current_time_for(record)
    for name in names:
        record.set_attribute(name, now)
    session.flush()
    return instance


def duplicate(instance):
    """Transient copy of ``instance`` without primary key or timestamps."""
    mapper = inspect(instance).mapper
    primary_keys = {mapper.get_property_by_column(col).key for col in mapper.primary_key}

    copy = mapper.class_()
    for prop in mapper.column_attrs:
        if prop.key in primary_keys:
            continue
        setattr(copy, prop.key, getattr(instance, prop.key))

    clear_timestamp_attributes(SQLAlchemyRecord(copy))
    return copy

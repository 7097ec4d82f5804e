from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..exceptions import ConfigurationError, TimestampConversionError

logger = logging.getLogger(__name__)

UTC = "utc"
LOCAL = "local"
TIMEZONE_MODES = (UTC, LOCAL)


def normalize_timezone_mode(mode) -> str:
    """Return ``"utc"`` or ``"local"`` for ``mode``, raising on anything else."""
    value = str(mode or "").strip().lower()
    if value not in TIMEZONE_MODES:
        raise ConfigurationError("DEFAULT_TIMEZONE", mode)
    return value


def now_local(tz_name: Optional[str] = None) -> datetime:
    """Return the current time in the local timezone.

    When ``tz_name`` names a zone (for example ``Asia/Makassar``) the time
    is taken in that zone. Without one, or when the zone key is not
    available on this system (no tzdata for it), the process's own local
    zone is used instead. The result is always timezone-aware.
    """
    if tz_name:
        try:
            return datetime.now(ZoneInfo(tz_name))
        except ZoneInfoNotFoundError:
            logger.warning("Timezone %r not found, falling back to system local time", tz_name)
    return datetime.now().astimezone()


def current_time(mode: str = UTC, tz_name: Optional[str] = None) -> datetime:
    """Current instant in UTC for ``mode="utc"``, in local time for ``mode="local"``."""
    if normalize_timezone_mode(mode) == UTC:
        return datetime.now(timezone.utc)
    return now_local(tz_name)


def _aware(value: datetime) -> datetime:
    # Naive values are wall-clock times in the process's local zone
    if value.tzinfo is None or value.utcoffset() is None:
        return value.astimezone()
    return value


def to_time(value) -> datetime:
    """Convert a stored attribute value to a timezone-aware ``datetime``.

    * ``datetime`` keeps its zone; a naive one is read as process-local time.
    * ``date`` becomes local midnight of that day.
    * ``int``/``float`` are read as UTC epoch seconds.
    * ``str`` is parsed as ISO-8601; a trailing ``Z`` means UTC, no offset means local.

    Every result can be compared with every other. Raises
    ``TimestampConversionError`` for anything else.
    """
    if isinstance(value, datetime):
        return _aware(value)
    if isinstance(value, date):
        return _aware(datetime(value.year, value.month, value.day))
    if isinstance(value, bool):
        raise TimestampConversionError(value, "booleans are not timestamps")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise TimestampConversionError(value, str(e)) from e
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return _aware(datetime.fromisoformat(text))
        except (OverflowError, OSError, ValueError) as e:
            raise TimestampConversionError(value, str(e)) from e
    raise TimestampConversionError(value, f"unsupported type {type(value).__name__}")

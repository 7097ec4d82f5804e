"""Record capabilities the timestamp policy needs, and their SQLAlchemy adapter."""

from __future__ import annotations

from typing import Any, Iterable, Optional, Protocol

from sqlalchemy import Column, inspect
from sqlalchemy.orm.attributes import set_committed_value

from .registry import RECORD_TIMESTAMPS_OPTION, config_for


class Record(Protocol):
    record_timestamps: bool
    default_timezone: str
    local_timezone: Optional[str]
    partial_writes: bool

    def column_exists(self, name: str) -> bool: ...

    def has_explicit_value(self, name: str) -> bool: ...

    def is_changed(self, name: str) -> bool: ...

    def has_changes(self) -> bool: ...

    def get_attribute(self, name: str) -> Any: ...

    def get_attribute_if_present(self, name: str) -> Optional[Any]: ...

    def set_attribute(self, name: str, value: Any) -> None: ...

    def clear_change_tracking(self, names: Iterable[str]) -> None: ...


def is_blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


class SQLAlchemyRecord:
    """Wraps a mapped instance so the policy can inspect and stamp it."""

    def __init__(self, instance):
        self.instance = instance
        self.state = inspect(instance)
        self.config = config_for(instance)

    def __repr__(self):
        return f"<SQLAlchemyRecord {self.state.class_.__name__}>"

    @property
    def record_timestamps(self) -> bool:
        override = self.state.info.get(RECORD_TIMESTAMPS_OPTION)
        if override is not None:
            return override
        return self.config.record_timestamps

    @property
    def default_timezone(self) -> str:
        return self.config.default_timezone

    @property
    def local_timezone(self) -> Optional[str]:
        return self.config.local_timezone

    @property
    def partial_writes(self) -> bool:
        return self.config.partial_writes

    def column_exists(self, name: str) -> bool:
        mapper = self.state.mapper
        if name not in mapper.column_attrs:
            return False
        # column_property() SQL expressions are mapped but not stored
        column = mapper.column_attrs[name].columns[0]
        return isinstance(column, Column) and any(column.table is table for table in mapper.tables)

    def has_explicit_value(self, name: str) -> bool:
        return not is_blank(getattr(self.instance, name, None))

    def is_changed(self, name: str) -> bool:
        if name not in self.state.attrs:
            return False
        return self.state.attrs[name].history.has_changes()

    def has_changes(self) -> bool:
        attrs = self.state.attrs
        return any(attrs[prop.key].history.has_changes() for prop in self.state.mapper.column_attrs)

    def get_attribute(self, name: str):
        return getattr(self.instance, name)

    def get_attribute_if_present(self, name: str):
        # hybrids, synonyms and plain properties
        return getattr(self.instance, name, None)

    def set_attribute(self, name: str, value) -> None:
        setattr(self.instance, name, value)

    def clear_change_tracking(self, names: Iterable[str]) -> None:
        for name in names:
            set_committed_value(self.instance, name, self.state.dict.get(name))

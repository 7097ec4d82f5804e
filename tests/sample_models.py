"""Mapped classes used across the test suite."""

from sqlalchemy import Column, DateTime, Integer, String, Text, func
from sqlalchemy.orm import column_property

from autostamp.db import Base
from autostamp.db.registry import timestamped


@timestamped
class Article(Base):
    __tablename__ = "articles"

    id = Column(Integer, primary_key=True)
    title = Column(String(200), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=True)
    created_on = Column(DateTime(timezone=True), nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    updated_on = Column(DateTime(timezone=True), nullable=True)


@timestamped
class Note(Base):
    __tablename__ = "notes"

    id = Column(Integer, primary_key=True)
    body = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=True)


@timestamped
class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True)
    body = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=True)

    # Derived from created_at in SQL, never stored
    created_on = column_property(func.date(created_at))


@timestamped(record_timestamps=False)
class AuditEntry(Base):
    __tablename__ = "audit_entries"

    id = Column(Integer, primary_key=True)
    action = Column(String(50), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=True)


@timestamped(partial_writes=False)
class Page(Base):
    __tablename__ = "pages"

    id = Column(Integer, primary_key=True)
    slug = Column(String(100), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)


@timestamped(default_timezone="local", local_timezone="Asia/Makassar")
class Shift(Base):
    __tablename__ = "shifts"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=True)


class Tag(Base):
    """Not registered for timestamping."""
    __tablename__ = "tags"

    id = Column(Integer, primary_key=True)
    label = Column(String(50), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=True)

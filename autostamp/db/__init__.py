import os

from flask import current_app, has_app_context
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()
_SessionFactory = None
_engine = None


def _configured_url():
    if has_app_context():
        return current_app.config.get("DATABASE_URL", "")
    return os.getenv("DATABASE_URL", "")


def get_engine():
    global _engine
    if _engine is None:
        url = _configured_url()
        if not url:
            raise RuntimeError("DATABASE_URL not configured")
        _engine = create_engine(url, pool_pre_ping=True)
    return _engine


def make_session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_session():
    global _SessionFactory
    if _SessionFactory is None:
        _SessionFactory = make_session_factory(get_engine())
    return _SessionFactory()


def reset_engine():
    """Drop the cached engine and session factory (used when the app reconfigures)."""
    global _engine, _SessionFactory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionFactory = None


# Hooks are attached to Base on import.
from . import timestamps  # noqa: E402,F401

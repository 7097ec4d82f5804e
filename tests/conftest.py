"""
Pytest configuration and fixtures for testing.
"""
import pytest
from flask import Flask
from sqlalchemy import create_engine

from autostamp.db import Base, make_session_factory
from autostamp.db.registry import BUILTIN_DEFAULTS, configure_defaults

# Import models so their tables exist on Base.metadata
from tests import sample_models  # noqa: F401

ENV_KEYS = (
    "FLASK_ENV",
    "DATABASE_URL",
    "TIMEZONE",
    "RECORD_TIMESTAMPS",
    "DEFAULT_TIMEZONE",
    "PARTIAL_WRITES",
    "LOG_LEVEL",
    "LOG_FILE",
)


@pytest.fixture(autouse=True)
def restore_defaults():
    """Every test starts and ends with the built-in process defaults."""
    configure_defaults(BUILTIN_DEFAULTS)
    yield
    configure_defaults(BUILTIN_DEFAULTS)


@pytest.fixture(name="clean_env")
def clean_env_fixture(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(name="db_session", scope="function")
def db_session_fixture(engine):
    """
    Provides a session on a fresh in-memory database for each test.
    """
    session = make_session_factory(engine)()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture(name="app")
def app_fixture(clean_env):
    app = Flask("autostamp_test")
    app.config["TESTING"] = True
    return app

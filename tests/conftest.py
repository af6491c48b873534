"""Pytest configuration and fixtures."""

import pytest

from retail_analytics.bootstrap import build_database
from retail_analytics.config import get_engine
from retail_analytics.schema import bootstrap_schema


@pytest.fixture
def database_url(tmp_path):
    """SQLite file URL, fresh for every test."""
    return f"sqlite:///{tmp_path / 'retail_test.db'}"


@pytest.fixture
def empty_engine(database_url):
    """Engine with the core tables created but no rows."""
    engine = get_engine(database_url)
    bootstrap_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def engine(database_url):
    """Engine with the full retail database: rows, view and reporting table."""
    engine = get_engine(database_url)
    build_database(engine)
    yield engine
    engine.dispose()

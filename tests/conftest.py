# /tests/conftest.py

from datetime import datetime, timezone

import pytest

from tms.db.base import Base
from tms.db.database import create_db_engine, create_session_factory
from tms.services.dashboard_service import DashboardService
from tms.services.database_helpers.dashboard_repository_sql import DashboardRepositorySQL
from tms.utils.clock import Clock

# Every DB-backed test runs "now" at this instant.
NOW = datetime(2025, 3, 15, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock(Clock):
    """Clock frozen at a given instant."""

    def __init__(self, current: datetime = NOW):
        self._current = current

    def now(self) -> datetime:
        return self._current


@pytest.fixture
def session_factory(tmp_path):
    """
    A fresh, file-backed SQLite database per test. A file (rather than
    :memory:) lets the service's worker threads each open their own connection.
    """
    engine = create_db_engine(f"sqlite:///{tmp_path / 'dashboard.db'}")
    Base.metadata.create_all(engine)
    yield create_session_factory(engine)
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    """A session for seeding test data."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def seed(db_session):
    """Adds and commits the given ORM objects, returning them for convenience."""
    def _seed(*objects):
        db_session.add_all(objects)
        db_session.commit()
        return objects
    return _seed


@pytest.fixture
def repository(session_factory):
    return DashboardRepositorySQL(session_factory)


@pytest.fixture
def service(repository):
    return DashboardService(repository, clock=FakeClock())


@pytest.fixture
def overfetching_service(repository):
    return DashboardService(repository, clock=FakeClock(), overfetch=True)

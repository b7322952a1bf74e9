# /tms/db/database.py

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from ..config import get_settings


def create_db_engine(database_url: str) -> Engine:
    # The 'check_same_thread' argument is only needed for SQLite. Dashboard
    # queries run in worker threads, each with its own session.
    engine_args = {"connect_args": {"check_same_thread": False}} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, **engine_args)


def create_session_factory(engine: Engine) -> sessionmaker:
    """Each call of the returned factory is a new, independent database session."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@lru_cache(maxsize=1)
def get_session_factory() -> sessionmaker:
    """The application's session factory, built lazily from DATABASE_URL."""
    return create_session_factory(create_db_engine(get_settings().database_url))

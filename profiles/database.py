"""Database engine and session factory construction.

The session factory built here is the store handle: entry points create it
explicitly and pass it to the repository, and they own its lifecycle
(``engine.dispose()`` on shutdown). Nothing in this module keeps global state.
"""

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from profiles.models import Base

logger = logging.getLogger(__name__)


def create_db_engine(database_url: str, debug: bool = False) -> Engine:
    """Create a SQLAlchemy engine configured for the given database URL.

    Args:
        database_url: SQLAlchemy database URL
        debug: Log SQL statements when True

    Returns:
        Configured Engine instance
    """
    if database_url.startswith('postgresql'):
        # PostgreSQL specific configuration
        engine = create_engine(
            database_url,
            pool_size=10,
            max_overflow=20,
            pool_pre_ping=True,
            pool_recycle=3600,
            echo=debug,
        )
    elif database_url in ('sqlite://', 'sqlite:///:memory:'):
        # single shared connection: only for tests driving the store from one thread
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=debug,
        )
    else:
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False} if database_url.startswith('sqlite') else {},
            echo=debug,
        )
    logger.info(f"Created database engine for {engine.url.render_as_string(hide_password=True)}")
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Build the session factory handed to repositories.

    Args:
        engine: Engine the sessions bind to

    Returns:
        sessionmaker producing independent sessions
    """
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Create all tables defined by the ORM models."""
    Base.metadata.create_all(bind=engine)
    logger.info("Database schema created")


def drop_db(engine: Engine) -> None:
    """Drop all tables defined by the ORM models."""
    Base.metadata.drop_all(bind=engine)
    logger.info("Database schema dropped")

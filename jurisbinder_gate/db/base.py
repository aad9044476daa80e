"""Engine and session setup for the SQL record store."""

from typing import Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool

DEFAULT_DATABASE_URL = "sqlite:///:memory:"

# The record store uses blocking sessions; async drivers map to their sync twin.
SYNC_DRIVERS = {
    "sqlite+aiosqlite": "sqlite",
    "postgresql+asyncpg": "postgresql+psycopg",
    "postgresql+aiopg": "postgresql+psycopg",
    "postgresql+psycopg_async": "postgresql+psycopg",
}


class Base(DeclarativeBase):
    """Declarative base of the record store tables."""

    pass


def get_database_url(raw_url: Optional[str] = None) -> str:
    """Resolve DATABASE_URL to a URL with a synchronous driver."""
    url = make_url(raw_url or DEFAULT_DATABASE_URL)
    driver = SYNC_DRIVERS.get(url.drivername)
    if driver is not None:
        url = url.set(drivername=driver)
    # str(url) would mask the password
    return url.render_as_string(hide_password=False)


def create_db_engine(raw_url: Optional[str] = None) -> Engine:
    """Create the engine for the record store database.

    SQLite gets one shared connection so that an in-memory database lives as
    long as the engine and is visible from every request thread.
    """
    database_url = get_database_url(raw_url)

    if make_url(database_url).get_backend_name() == "sqlite":
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    return create_engine(database_url, pool_pre_ping=True)


def get_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_database(engine: Engine) -> None:
    """Create the record store tables if they do not exist."""
    from . import models  # noqa: F401  registers the tables on Base

    Base.metadata.create_all(bind=engine)

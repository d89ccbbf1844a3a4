"""
Database Configuration Module

SQLAlchemy 2.0 setup for the Bible API.

Lifecycle
=========
The engine is owned by a Database object that is built once when the
application starts (see the lifespan in main.py), stored on app.state and
disposed on shutdown. Nothing connects at import time.

Session Management Pattern
==========================
"Session per request":
1. Request arrives → get_db() opens a session from app.state.database
2. The resolvers use that session for every query of the request
3. The session is closed when the request ends

The API is read-only, so sessions are never committed by the routes.
"""

import logging
from collections.abc import Generator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from bible_api.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic uses Base.metadata to discover the tables for migrations.
    """
    pass


class Database:
    """
    Engine and session factory for one database.

    Usage:
        database = Database.from_settings(get_settings())
        with database.session() as session:
            ...
        database.dispose()
    """

    def __init__(self, url: str, *, echo: bool = False, **engine_options) -> None:
        self.url = url
        # - pool_pre_ping: test connection health before using
        # - echo: log all SQL statements (debug only)
        self.engine: Engine = create_engine(
            url,
            pool_pre_ping=True,
            echo=echo,
            **engine_options,
        )
        self.session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build the application database from settings."""
        engine_options = {}
        # SQLite uses a single-connection pool; pool sizing only applies
        # to server databases.
        if not settings.database_url.startswith("sqlite"):
            engine_options["pool_size"] = settings.db_pool_size
            engine_options["max_overflow"] = settings.db_max_overflow
        return cls(settings.database_url, echo=settings.debug, **engine_options)

    def session(self) -> Session:
        """Open a new session bound to this database."""
        return self.session_factory()

    def create_tables(self) -> None:
        """
        Create all database tables.

        WARNING: In production, use Alembic migrations instead!
        """
        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self) -> None:
        """
        Drop all database tables.

        DANGER: This deletes all data! Only use in development and tests.
        """
        Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        """Close every pooled connection."""
        self.engine.dispose()
        logger.info("Database engine disposed")


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Code before yield opens the session, code after yield closes it, even
    when the route raised.

    Usage in Routes:
        @router.get("/books")
        def list_books(db: Session = Depends(get_db)):
            ...

    Yields:
        SQLAlchemy Session instance
    """
    database: Database = request.app.state.database
    db = database.session()
    try:
        yield db
    finally:
        db.close()

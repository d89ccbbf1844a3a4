"""
pytest Fixtures for Bible API Tests

Shared fixtures used across all test files.

FIXTURE SCOPES:
- session scope for the engine (expensive to create)
- function scope for sessions (isolation between tests)

SAMPLE DATA:
    Genesis  (order 1,  OLD)  chapters 1-3, chapter 1 has verses 1-3
    Exodus   (order 2,  OLD)  no chapters
    Matthew  (order 47, NEW)  chapter 1 with one verse
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app.
# Settings are cached on first use, and the rate limiter is built at import.
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["CACHE_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"

from collections.abc import Generator
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bible_api.database import Base, get_db
from bible_api.main import app
from bible_api.models import Book, Chapter, Testament, Verse
from bible_api.seeding import CANON
from bible_api.services.cache import CacheClient, get_cache

# =============================================================================
# DATABASE FIXTURES
# =============================================================================
# SQLite in-memory keeps the suite fast and self-contained.
# PostgreSQL-specific behaviour (native enum type) is not exercised here.


@pytest.fixture(scope="session")
def engine():
    """
    SQLite in-memory engine shared by the whole run.

    StaticPool keeps the single connection alive; without it the in-memory
    database would disappear between connections.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Fresh session per test, wrapped in a transaction that is rolled back.

    Commits made by fixtures only release a savepoint, so tests never see
    each other's rows.
    """
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )

    connection = engine.connect()
    transaction = connection.begin()
    session = TestSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Test client bound to the test session.

    get_db is overridden so every request uses db_session.
    """

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# CACHE FIXTURES
# =============================================================================


@pytest.fixture
def fake_redis() -> MagicMock:
    """
    Dict-backed stand-in for redis.Redis.

    Supports the calls CacheClient makes: get, setex, delete, scan_iter.
    """
    store: dict[str, str] = {}
    redis_mock = MagicMock()
    redis_mock.store = store
    redis_mock.get.side_effect = store.get
    redis_mock.setex.side_effect = lambda key, ttl, value: store.__setitem__(key, value)
    redis_mock.delete.side_effect = lambda *keys: sum(store.pop(k, None) is not None for k in keys)
    redis_mock.scan_iter.side_effect = lambda match: [
        k for k in list(store) if k.startswith(match.rstrip("*"))
    ]
    return redis_mock


@pytest.fixture
def cached_client(client: TestClient, fake_redis: MagicMock) -> Generator[TestClient, None, None]:
    """Test client whose routes cache into fake_redis."""
    cache = CacheClient(fake_redis, default_ttl=300)
    app.dependency_overrides[get_cache] = lambda: cache
    yield client
    app.dependency_overrides.pop(get_cache, None)


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


@pytest.fixture
def genesis(db_session: Session) -> Book:
    """Genesis with chapters 1-3; chapter 1 holds verses 1-3."""
    book = Book(order=1, name="Genesis", testament=Testament.OLD, total_chapters=3)
    book.chapters = [Chapter(number=n) for n in (1, 2, 3)]
    book.chapters[0].verses = [
        Verse(number=1, text="In the beginning God created the heavens and the earth."),
        Verse(number=2, text="The earth was without form and void."),
        Verse(number=3, text="And God said, Let there be light: and there was light."),
    ]
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def exodus(db_session: Session) -> Book:
    """A book that exists but has no chapter rows."""
    book = Book(order=2, name="Exodus", testament=Testament.OLD, total_chapters=0)
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def matthew(db_session: Session) -> Book:
    """First book of the New Testament with a single chapter and verse."""
    book = Book(order=47, name="Matthew", testament=Testament.NEW, total_chapters=1)
    book.chapters = [Chapter(number=1)]
    book.chapters[0].verses = [
        Verse(number=1, text="The book of the genealogy of Jesus Christ."),
    ]
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def sample_bible(genesis: Book, exodus: Book, matthew: Book) -> dict[str, Book]:
    return {"genesis": genesis, "exodus": exodus, "matthew": matthew}


@pytest.fixture
def canon_books(db_session: Session) -> list[Book]:
    """All 73 books (46 OLD, 27 NEW) without chapters, for listing tests."""
    books = [
        Book(
            order=entry.order,
            name=entry.name,
            testament=entry.testament,
            total_chapters=entry.chapters,
        )
        for entry in CANON
    ]
    db_session.add_all(books)
    db_session.commit()
    return books

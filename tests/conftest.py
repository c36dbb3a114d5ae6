import os
from collections.abc import AsyncGenerator

# Settings are read at import time; point them at the test database first.
os.environ.setdefault("BOOKSCOUT_DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.setdefault("BOOKSCOUT_JWT_SECRET", "test-secret")
os.environ.setdefault("BOOKSCOUT_ALLOW_TEST_IDENTITY", "true")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from bookscout.database import async_session_factory, engine  # noqa: E402
from bookscout.domain.models import Author, Base, Book  # noqa: E402


@pytest.fixture
async def setup_db() -> AsyncGenerator[None, None]:
    """Create all tables before a test, drop them after."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(setup_db) -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as s:
        yield s


@pytest.fixture
async def catalog(session: AsyncSession) -> None:
    """
    Seed a small catalog.

    Books 1 and 2 are typical wishlist seeds, 3 a typical viewed seed.
    Book 3 lists 50, which is not in the catalog. Books 5 and 6 carry
    malformed similarity lists, the second with a numeric overflow.
    """
    session.add_all(
        [
            Author(author_id="A1", name="Alice"),
            Author(author_id="A2", name="Bob"),
            Author(author_id="A3", name=None),
        ]
    )
    session.add_all(
        [
            Book(book_id=1, title="Seed One", author_ids=["A1"], similar_books="['10','20']",
                 genre="fiction", ratings_count=500, average_rating=4.1),
            Book(book_id=2, title="Seed Two", author_ids=["A2"], similar_books="['10','30']",
                 genre="fantasy", ratings_count=500, average_rating=4.5),
            Book(book_id=3, title="Viewed", author_ids=["A1", "A2"],
                 similar_books="['20','30','40','50']", genre="fiction", ratings_count=20,
                 average_rating=3.9),
            Book(book_id=5, title="Broken", author_ids=[], similar_books="not valid json",
                 ratings_count=0),
            Book(book_id=6, title="Overflow", author_ids=[], similar_books="[1e999]",
                 ratings_count=0),
            Book(book_id=10, title="Ten", author_ids=["A1", "A2"], isbn13="9780000000010",
                 genre="fiction", ratings_count=1000, average_rating=4.0,
                 description="Tenth book", publisher="Pub", publication_year=2001,
                 num_pages=321, language_code="eng", similar_books="['20']"),
            Book(book_id=20, title="Twenty", author_ids=["A2"], genre="mystery",
                 ratings_count=7, average_rating=None),
            Book(book_id=30, title="Thirty", author_ids=[], genre="Fiction", ratings_count=3,
                 average_rating=3.0),
            Book(book_id=40, title="Forty", author_ids=["A3", "A9"], ratings_count=1,
                 average_rating=2.5),
        ]
    )
    await session.commit()

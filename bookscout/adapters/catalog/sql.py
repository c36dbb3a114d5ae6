"""SQLAlchemy-backed catalog adapter."""

import logging
from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bookscout.domain.models import (
    VIEW_DETAILS_EVENT,
    Author,
    Book,
    Interaction,
    WishlistEntry,
)
from bookscout.ports.catalog import CatalogPort

logger = logging.getLogger(__name__)


class SqlCatalogAdapter(CatalogPort):
    """Read books, authors, wishlists and interactions from the database."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_wishlist(self, user_id: UUID) -> list[int]:
        result = await self._session.execute(
            select(WishlistEntry.book_id).where(WishlistEntry.user_id == user_id)
        )
        return list(result.scalars().all())

    async def get_interactions(
        self, user_id: UUID, event: str = VIEW_DETAILS_EVENT
    ) -> list[int]:
        result = await self._session.execute(
            select(Interaction.book_id).where(
                Interaction.user_id == user_id,
                Interaction.event == event,
            )
        )
        return list(result.scalars().all())

    async def get_books_by_ids(self, ids: Iterable[int]) -> list[Book]:
        wanted = set(ids)
        if not wanted:
            return []
        result = await self._session.execute(
            select(Book).where(Book.book_id.in_(wanted))
        )
        books = list(result.scalars().all())
        logger.debug("Fetched %d of %d requested books", len(books), len(wanted))
        return books

    async def get_authors_by_ids(self, author_ids: Iterable[str]) -> list[Author]:
        wanted = set(author_ids)
        if not wanted:
            return []
        result = await self._session.execute(
            select(Author).where(Author.author_id.in_(wanted))
        )
        return list(result.scalars().all())

    async def get_book(self, book_id: int) -> Book | None:
        result = await self._session.execute(
            select(Book).where(Book.book_id == book_id)
        )
        return result.scalar_one_or_none()

    async def get_trending_books(self, limit: int) -> list[Book]:
        result = await self._session.execute(
            select(Book)
            .where(Book.ratings_count > 0, Book.average_rating.is_not(None))
            .order_by(Book.ratings_count.desc(), Book.average_rating.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get_books_by_genre(self, genre: str, limit: int) -> list[Book]:
        result = await self._session.execute(
            select(Book)
            .where(Book.genre == genre)
            .order_by(Book.ratings_count.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

"""Wishlist management service."""

import logging
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bookscout.domain.models import Book, WishlistEntry

logger = logging.getLogger(__name__)


class WishlistService:
    """Adds, lists and removes a user's wishlisted books."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _get_entry(self, user_id: UUID, book_id: int) -> WishlistEntry | None:
        result = await self._session.execute(
            select(WishlistEntry).where(
                WishlistEntry.user_id == user_id,
                WishlistEntry.book_id == book_id,
            )
        )
        return result.scalar_one_or_none()

    async def add(self, user_id: UUID, book_id: int) -> WishlistEntry:
        """
        Wishlist a book.

        Raises 404 if the book is not in the catalog and 409 if the user
        already has it wishlisted.
        """
        book = await self._session.get(Book, book_id)
        if not book:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Book not found"
            )
        if await self._get_entry(user_id, book_id):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Book already in wishlist",
            )

        entry = WishlistEntry(user_id=user_id, book_id=book_id)
        self._session.add(entry)
        await self._session.flush()
        logger.info("User %s wishlisted book %d", user_id, book_id)
        return entry

    async def list_books(self, user_id: UUID) -> list[Book]:
        """Wishlisted books, most recently added first."""
        result = await self._session.execute(
            select(Book)
            .join(WishlistEntry, WishlistEntry.book_id == Book.book_id)
            .where(WishlistEntry.user_id == user_id)
            .order_by(WishlistEntry.added_at.desc())
        )
        return list(result.scalars().all())

    async def remove(self, user_id: UUID, book_id: int) -> None:
        entry = await self._get_entry(user_id, book_id)
        if not entry:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Book not found in wishlist",
            )
        await self._session.delete(entry)
        await self._session.flush()
        logger.info("User %s removed book %d from wishlist", user_id, book_id)

"""Catalog port — read access to books, authors and user signals."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from uuid import UUID

from bookscout.domain.models import VIEW_DETAILS_EVENT, Author, Book


class CatalogPort(ABC):
    """Storage-facing reads the recommendation and book views depend on."""

    @abstractmethod
    async def get_wishlist(self, user_id: UUID) -> list[int]:
        """Book ids on the user's wishlist."""
        ...

    @abstractmethod
    async def get_interactions(
        self, user_id: UUID, event: str = VIEW_DETAILS_EVENT
    ) -> list[int]:
        """Book ids of the user's logged interactions with ``event``."""
        ...

    @abstractmethod
    async def get_books_by_ids(self, ids: Iterable[int]) -> list[Book]:
        """Batch fetch. Result order is unspecified; unknown ids are absent."""
        ...

    @abstractmethod
    async def get_authors_by_ids(self, author_ids: Iterable[str]) -> list[Author]:
        ...

    @abstractmethod
    async def get_book(self, book_id: int) -> Book | None:
        ...

    @abstractmethod
    async def get_trending_books(self, limit: int) -> list[Book]:
        ...

    @abstractmethod
    async def get_books_by_genre(self, genre: str, limit: int) -> list[Book]:
        ...

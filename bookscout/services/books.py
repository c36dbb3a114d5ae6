"""Book lookup and presentation."""

import logging
from collections.abc import Iterable

from fastapi import HTTPException, status

from bookscout.api.schemas import BookDetailResponse, BookResponse
from bookscout.config import settings
from bookscout.domain.models import Book
from bookscout.ports.catalog import CatalogPort
from bookscout.recommendation.similarity import parse_similar_books

logger = logging.getLogger(__name__)

DEFAULT_AUTHOR = "Author"

VALID_CATEGORIES = (
    "fiction",
    "non-fiction",
    "romance",
    "paranormal",
    "fantasy",
    "mystery",
    "crime",
    "thriller",
    "history",
    "biography",
    "historical fiction",
    "children",
    "graphic",
    "comics",
    "young-adult",
    "poetry",
)


def format_authors(names: Iterable[str | None]) -> str:
    """Join author names for display, falling back to ``"Author"``."""
    joined = ", ".join(name for name in names if name)
    return joined or DEFAULT_AUTHOR


def order_by_ids(books: Iterable[Book], ids: Iterable[int]) -> list[Book]:
    """Arrange a batch result in the order of ``ids``, dropping unknown ids."""
    by_id = {book.book_id: book for book in books}
    return [by_id[book_id] for book_id in ids if book_id in by_id]


class BookService:
    """Resolves books and flattens their authors for display."""

    def __init__(self, catalog: CatalogPort) -> None:
        self._catalog = catalog

    async def _author_names(self, books: list[Book]) -> dict[str, str | None]:
        author_ids = {author_id for book in books for author_id in (book.author_ids or [])}
        authors = await self._catalog.get_authors_by_ids(author_ids)
        return {author.author_id: author.name for author in authors}

    @staticmethod
    def _authors_for(book: Book, names: dict[str, str | None]) -> str:
        return format_authors(names.get(author_id) for author_id in (book.author_ids or []))

    async def present(self, books: list[Book]) -> list[BookResponse]:
        """Convert books to responses with a single author lookup."""
        if not books:
            return []
        names = await self._author_names(books)
        return [
            BookResponse(
                book_id=book.book_id,
                title=book.title,
                average_rating=book.average_rating,
                ratings_count=book.ratings_count or 0,
                description=book.description,
                authors=self._authors_for(book, names),
                isbn13=book.isbn13,
                genre=book.genre,
            )
            for book in books
        ]

    async def present_details(self, books: list[Book]) -> list[BookDetailResponse]:
        """Like :meth:`present`, with publication data and parsed similar books."""
        if not books:
            return []
        names = await self._author_names(books)
        return [
            BookDetailResponse(
                book_id=book.book_id,
                title=book.title,
                average_rating=book.average_rating,
                ratings_count=book.ratings_count or 0,
                description=book.description,
                authors=self._authors_for(book, names),
                isbn13=book.isbn13,
                genre=book.genre,
                publisher=book.publisher,
                publication_year=book.publication_year,
                num_pages=book.num_pages,
                language_code=book.language_code,
                url=book.url,
                similar_books=parse_similar_books(book.similar_books, book.book_id),
            )
            for book in books
        ]

    async def get_details(self, book_id: int) -> BookDetailResponse:
        book = await self._catalog.get_book(book_id)
        if not book:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Book not found"
            )
        [details] = await self.present_details([book])
        return details

    async def trending(self) -> list[BookResponse]:
        books = await self._catalog.get_trending_books(settings.trending_limit)
        return await self.present(books)

    async def by_category(self, category: str) -> list[BookResponse]:
        """Books in one of the fixed categories, most rated first."""
        genre = category.lower()
        if genre not in VALID_CATEGORIES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid category. Must be one of: {', '.join(VALID_CATEGORIES)}",
            )
        books = await self._catalog.get_books_by_genre(genre, settings.category_limit)
        logger.info("Category %s: %d books", genre, len(books))
        return await self.present(books)

"""Recommendation service: rank, resolve and present books."""

import logging
from uuid import UUID

from bookscout.api.schemas import BookResponse
from bookscout.ports.catalog import CatalogPort
from bookscout.ports.recommender import RecommenderPort
from bookscout.services.books import BookService, order_by_ids

logger = logging.getLogger(__name__)


class RecommendationService:
    """Turns ranked book ids into display-ready books, keeping the ranking."""

    def __init__(self, catalog: CatalogPort, recommender: RecommenderPort) -> None:
        self._catalog = catalog
        self._recommender = recommender
        self._books = BookService(catalog)

    async def recommend(self, user_id: UUID) -> list[BookResponse]:
        ranked_ids = await self._recommender.recommend(user_id)
        if not ranked_ids:
            return []

        fetched = await self._catalog.get_books_by_ids(ranked_ids)
        books = order_by_ids(fetched, ranked_ids)
        if len(books) < len(ranked_ids):
            logger.info(
                "Dropped %d recommended ids with no catalog record",
                len(ranked_ids) - len(books),
            )
        return await self._books.present(books)

"""Similar-books recommender adapter."""

import logging
from uuid import UUID

from bookscout.ports.catalog import CatalogPort
from bookscout.ports.recommender import RecommenderPort
from bookscout.recommendation.scoring import (
    VIEW_WEIGHT,
    WISHLIST_WEIGHT,
    recommend_book_ids,
)
from bookscout.recommendation.similarity import parse_similar_books

logger = logging.getLogger(__name__)


class SimilarBooksRecommender(RecommenderPort):
    """
    Recommend books listed as similar to what the user wishlisted or viewed.

    Reads a snapshot of the user's wishlist and ``view_details`` history,
    loads the seed books in one batch and ranks the books on their
    similarity lists. Seeds missing from the catalog contribute nothing.
    """

    def __init__(
        self,
        catalog: CatalogPort,
        wishlist_weight: int = WISHLIST_WEIGHT,
        view_weight: int = VIEW_WEIGHT,
    ) -> None:
        self._catalog = catalog
        self._wishlist_weight = wishlist_weight
        self._view_weight = view_weight

    async def recommend(self, user_id: UUID) -> list[int]:
        wishlist_ids = set(await self._catalog.get_wishlist(user_id))
        viewed_ids = set(await self._catalog.get_interactions(user_id))
        if not wishlist_ids and not viewed_ids:
            logger.info("No signals for user %s", user_id)
            return []

        seeds = await self._catalog.get_books_by_ids(wishlist_ids | viewed_ids)
        similar = {
            book.book_id: parse_similar_books(book.similar_books, book.book_id)
            for book in seeds
        }

        ranked = recommend_book_ids(
            wishlist_ids,
            viewed_ids,
            lambda book_id: similar.get(book_id, []),
            wishlist_weight=self._wishlist_weight,
            view_weight=self._view_weight,
        )
        logger.info(
            "Scored %d candidates for user %s (%d wishlist, %d viewed seeds)",
            len(ranked),
            user_id,
            len(wishlist_ids),
            len(viewed_ids),
        )
        return ranked

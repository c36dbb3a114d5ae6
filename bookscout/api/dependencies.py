"""Request-scoped wiring of ports to their adapters."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bookscout.adapters.catalog.sql import SqlCatalogAdapter
from bookscout.adapters.recommender.similar_books import SimilarBooksRecommender
from bookscout.config import settings
from bookscout.database import get_session
from bookscout.ports.catalog import CatalogPort
from bookscout.ports.recommender import RecommenderPort


def get_catalog(session: AsyncSession = Depends(get_session)) -> CatalogPort:
    return SqlCatalogAdapter(session)


def get_recommender(catalog: CatalogPort = Depends(get_catalog)) -> RecommenderPort:
    return SimilarBooksRecommender(
        catalog,
        wishlist_weight=settings.recommendation_wishlist_weight,
        view_weight=settings.recommendation_view_weight,
    )

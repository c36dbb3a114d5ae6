"""Recommendation routes."""

from fastapi import APIRouter, Depends

from bookscout.api.dependencies import get_catalog, get_recommender
from bookscout.api.middleware.auth import get_current_user
from bookscout.api.schemas import RecommendationsResponse
from bookscout.domain.models import User
from bookscout.ports.catalog import CatalogPort
from bookscout.ports.recommender import RecommenderPort
from bookscout.services.recommendation import RecommendationService

router = APIRouter(tags=["Recommendations"])


@router.get("/recommendations", response_model=RecommendationsResponse)
async def get_recommendations(
    user: User = Depends(get_current_user),
    catalog: CatalogPort = Depends(get_catalog),
    recommender: RecommenderPort = Depends(get_recommender),
) -> RecommendationsResponse:
    """Books similar to what the user wishlisted or viewed, best first."""
    books = await RecommendationService(catalog, recommender).recommend(user.id)
    return RecommendationsResponse(recommendations=books)

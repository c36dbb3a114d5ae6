"""Recommender port — abstract interface for the recommendation engine."""

from abc import ABC, abstractmethod
from uuid import UUID


class RecommenderPort(ABC):
    """Abstraction for the book recommendation engine."""

    @abstractmethod
    async def recommend(self, user_id: UUID) -> list[int]:
        """Return recommended book ids for a user, best first."""
        ...

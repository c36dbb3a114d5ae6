from bookscout.recommendation.scoring import (
    rank_candidates,
    recommend_book_ids,
    score_candidates,
)
from bookscout.recommendation.similarity import parse_similar_books

__all__ = [
    "parse_similar_books",
    "rank_candidates",
    "recommend_book_ids",
    "score_candidates",
]

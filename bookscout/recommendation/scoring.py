"""
Candidate scoring for similar-books recommendations.

Every book the user has wishlisted or viewed is a seed. Each seed lends
weight to the books on its similarity list: wishlist seeds add
``wishlist_weight`` per listing, viewed seeds add ``view_weight``. Books
already on the wishlist are never candidates. Candidates are ranked by
descending weight, ties by ascending book id.
"""

from collections import Counter
from collections.abc import Callable, Iterable

SimilarBooksLookup = Callable[[int], list[int]]

WISHLIST_WEIGHT = 2
VIEW_WEIGHT = 1


def score_candidates(
    wishlist_ids: Iterable[int],
    interacted_ids: Iterable[int],
    similar_books: SimilarBooksLookup,
    *,
    wishlist_weight: int = WISHLIST_WEIGHT,
    view_weight: int = VIEW_WEIGHT,
) -> Counter[int]:
    """Accumulate per-candidate weights, excluding wishlisted books."""
    wishlist = set(wishlist_ids)
    # Repeated views of one book count once.
    viewed = set(interacted_ids)

    weights: Counter[int] = Counter()
    for seed in wishlist:
        for candidate in similar_books(seed):
            weights[candidate] += wishlist_weight
    for seed in viewed:
        for candidate in similar_books(seed):
            weights[candidate] += view_weight

    for book_id in wishlist:
        weights.pop(book_id, None)
    return weights


def rank_candidates(weights: Counter[int] | dict[int, int]) -> list[int]:
    """Order candidate ids by descending weight, then ascending id."""
    ranked = sorted(weights.items(), key=lambda item: (-item[1], item[0]))
    return [book_id for book_id, _ in ranked]


def recommend_book_ids(
    wishlist_ids: Iterable[int],
    interacted_ids: Iterable[int],
    similar_books: SimilarBooksLookup,
    *,
    wishlist_weight: int = WISHLIST_WEIGHT,
    view_weight: int = VIEW_WEIGHT,
) -> list[int]:
    return rank_candidates(
        score_candidates(
            wishlist_ids,
            interacted_ids,
            similar_books,
            wishlist_weight=wishlist_weight,
            view_weight=view_weight,
        )
    )

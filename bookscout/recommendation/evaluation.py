"""
Offline evaluation of the similar-books recommender.

Synthetic readers are sampled from the catalog's genres: some wishlist
books from a single genre, others a mix of three. For each reader the
relevant set is the union of the wishlisted books' similarity lists, minus
the wishlist itself. The reader's top-k recommendations are scored against
that set with HitRate, Precision, MRR and NDCG. Averages are taken over
every sampled reader; readers with an empty relevant set are skipped and
contribute zero.
"""

import logging
import math
import random
from collections.abc import Collection, Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from bookscout.recommendation.scoring import (
    VIEW_WEIGHT,
    WISHLIST_WEIGHT,
    SimilarBooksLookup,
    recommend_book_ids,
)
from bookscout.recommendation.similarity import parse_similar_books

logger = logging.getLogger(__name__)

DEFAULT_K = 10
UNKNOWN_GENRE = "Unknown"


@dataclass
class SyntheticReader:
    reader_id: int
    wishlist: list[int]


@dataclass
class EvaluationReport:
    k: int
    readers: int = 0
    evaluated: int = 0
    skipped: int = 0
    hit_rate: float = 0.0
    precision: float = 0.0
    mrr: float = 0.0
    ndcg: float = 0.0
    per_reader: dict[int, dict[str, float]] = field(default_factory=dict)

    def metrics(self) -> dict[str, float]:
        return {
            f"HitRate@{self.k}": self.hit_rate,
            f"Precision@{self.k}": self.precision,
            f"MRR@{self.k}": self.mrr,
            f"NDCG@{self.k}": self.ndcg,
        }


# ── Metrics ──────────────────────────────────────────


def hit_at_k(recommended: Sequence[int], relevant: Collection[int], k: int) -> float:
    """1.0 when any of the top ``k`` is relevant."""
    return 1.0 if any(book_id in relevant for book_id in recommended[:k]) else 0.0


def precision_at_k(recommended: Sequence[int], relevant: Collection[int], k: int) -> float:
    """Relevant share of ``k`` slots; short lists are not rescaled."""
    hits = sum(1 for book_id in recommended[:k] if book_id in relevant)
    return hits / k


def _first_hit(recommended: Sequence[int], relevant: Collection[int], k: int) -> int | None:
    for rank, book_id in enumerate(recommended[:k]):
        if book_id in relevant:
            return rank
    return None


def reciprocal_rank_at_k(recommended: Sequence[int], relevant: Collection[int], k: int) -> float:
    rank = _first_hit(recommended, relevant, k)
    return 0.0 if rank is None else 1.0 / (rank + 1)


def ndcg_at_k(recommended: Sequence[int], relevant: Collection[int], k: int) -> float:
    """
    Binary-relevance gain of the first relevant hit, discounted by rank.

    Only the first hit is credited, so the ideal ranking scores 1.0 and no
    normalisation by the relevant set size is applied.
    """
    rank = _first_hit(recommended, relevant, k)
    return 0.0 if rank is None else 1.0 / math.log2(rank + 2)


# ── Readers ──────────────────────────────────────────


def group_by_genre(genres: Mapping[int, str | None]) -> dict[str, list[int]]:
    """Bucket book ids by genre; books without one go under ``"Unknown"``."""
    grouped: dict[str, list[int]] = {}
    for book_id, genre in genres.items():
        grouped.setdefault(genre or UNKNOWN_GENRE, []).append(book_id)
    return grouped


def _sample(rng: random.Random, population: Sequence, n: int) -> list:
    return rng.sample(list(population), min(n, len(population)))


def sample_readers(
    books_by_genre: Mapping[str, Sequence[int]],
    rng: random.Random,
    *,
    single_genre: int = 20,
    mixed_genre: int = 20,
    wishlist_size: int = 5,
    first_id: int = 1_000_000,
) -> list[SyntheticReader]:
    """Sample single-genre readers, then readers mixing three genres two books each."""
    genres = sorted(books_by_genre)
    if not genres:
        return []

    readers: list[SyntheticReader] = []
    next_id = first_id
    for _ in range(single_genre):
        genre = rng.choice(genres)
        readers.append(
            SyntheticReader(next_id, _sample(rng, books_by_genre[genre], wishlist_size))
        )
        next_id += 1
    for _ in range(mixed_genre):
        picks = [
            book_id
            for genre in _sample(rng, genres, 3)
            for book_id in _sample(rng, books_by_genre[genre], 2)
        ]
        readers.append(SyntheticReader(next_id, picks[:wishlist_size]))
        next_id += 1
    return readers


def relevant_books(training: Iterable[int], similar_books: SimilarBooksLookup) -> set[int]:
    training = set(training)
    return {
        candidate
        for seed in training
        for candidate in similar_books(seed)
        if candidate not in training
    }


# ── Evaluation ───────────────────────────────────────


def evaluate(
    readers: Iterable[SyntheticReader],
    similar_books: SimilarBooksLookup,
    *,
    k: int = DEFAULT_K,
    catalog_ids: Collection[int] | None = None,
    wishlist_weight: int = WISHLIST_WEIGHT,
    view_weight: int = VIEW_WEIGHT,
) -> EvaluationReport:
    """
    Score each reader's wishlist-only recommendations against its relevant set.

    ``catalog_ids``, when given, drops recommended ids with no book record,
    as the recommendations endpoint does.
    """
    report = EvaluationReport(k=k)
    totals = {"hit": 0.0, "precision": 0.0, "mrr": 0.0, "ndcg": 0.0}

    for reader in readers:
        report.readers += 1
        relevant = relevant_books(reader.wishlist, similar_books)
        if not relevant:
            logger.info("Reader %d: no similar books for training; skipping", reader.reader_id)
            report.skipped += 1
            continue

        recommended = recommend_book_ids(
            reader.wishlist,
            (),
            similar_books,
            wishlist_weight=wishlist_weight,
            view_weight=view_weight,
        )
        if catalog_ids is not None:
            recommended = [book_id for book_id in recommended if book_id in catalog_ids]
        top = recommended[:k]

        scores = {
            "hit": hit_at_k(top, relevant, k),
            "precision": precision_at_k(top, relevant, k),
            "mrr": reciprocal_rank_at_k(top, relevant, k),
            "ndcg": ndcg_at_k(top, relevant, k),
        }
        for name, value in scores.items():
            totals[name] += value
        report.per_reader[reader.reader_id] = scores
        report.evaluated += 1
        logger.debug(
            "Reader %d: %d training, %d relevant, %d recs",
            reader.reader_id,
            len(reader.wishlist),
            len(relevant),
            len(top),
        )

    if report.readers:
        report.hit_rate = totals["hit"] / report.readers
        report.precision = totals["precision"] / report.readers
        report.mrr = totals["mrr"] / report.readers
        report.ndcg = totals["ndcg"] / report.readers
    return report


def evaluate_catalog(
    rows: Iterable[tuple[int, str | None, str | None]],
    rng: random.Random,
    *,
    k: int = DEFAULT_K,
    single_genre: int = 20,
    mixed_genre: int = 20,
    wishlist_size: int = 5,
    wishlist_weight: int = WISHLIST_WEIGHT,
    view_weight: int = VIEW_WEIGHT,
) -> EvaluationReport:
    """Run the full evaluation over ``(book_id, genre, similar_books)`` rows."""
    genres: dict[int, str | None] = {}
    similar: dict[int, list[int]] = {}
    for book_id, genre, raw_similar in rows:
        genres[book_id] = genre
        similar[book_id] = parse_similar_books(raw_similar, book_id)
    logger.info("Loaded %d books", len(genres))

    readers = sample_readers(
        group_by_genre(genres),
        rng,
        single_genre=single_genre,
        mixed_genre=mixed_genre,
        wishlist_size=wishlist_size,
    )
    return evaluate(
        readers,
        lambda book_id: similar.get(book_id, []),
        k=k,
        catalog_ids=genres.keys(),
        wishlist_weight=wishlist_weight,
        view_weight=view_weight,
    )

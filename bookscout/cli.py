"""Command-line tools for BookScout."""

import asyncio
import logging
import random

import click
from rich.console import Console
from rich.table import Table
from sqlalchemy import select

from bookscout.config import settings
from bookscout.database import async_session_factory, engine
from bookscout.domain.models import Book
from bookscout.recommendation.evaluation import DEFAULT_K, evaluate_catalog

console = Console()


async def _load_rows() -> list[tuple[int, str | None, str | None]]:
    try:
        async with async_session_factory() as session:
            result = await session.execute(
                select(Book.book_id, Book.genre, Book.similar_books)
            )
            return [tuple(row) for row in result.all()]
    finally:
        await engine.dispose()


@click.group()
def cli():
    """BookScout maintenance commands"""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )


@cli.command()
@click.option("--k", "k", default=DEFAULT_K, show_default=True, help="Cut-off rank")
@click.option("--single-genre", default=20, show_default=True, help="Single-genre readers")
@click.option("--mixed-genre", default=20, show_default=True, help="Mixed-genre readers")
@click.option("--wishlist-size", default=5, show_default=True, help="Books per reader")
@click.option("--seed", default=None, type=int, help="Random seed for reader sampling")
def evaluate(k, single_genre, mixed_genre, wishlist_size, seed):
    """Evaluate recommendations against similar-books ground truth"""
    with console.status("Loading catalog..."):
        rows = asyncio.run(_load_rows())
    if not rows:
        console.print("[yellow]Catalog is empty[/yellow]")
        return

    report = evaluate_catalog(
        rows,
        random.Random(seed),
        k=k,
        single_genre=single_genre,
        mixed_genre=mixed_genre,
        wishlist_size=wishlist_size,
        wishlist_weight=settings.recommendation_wishlist_weight,
        view_weight=settings.recommendation_view_weight,
    )

    table = Table(
        title=f"{report.evaluated} of {report.readers} readers evaluated "
        f"({report.skipped} skipped)"
    )
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")
    for name, value in report.metrics().items():
        table.add_row(name, f"{value:.4f}")
    console.print(table)


if __name__ == "__main__":
    cli()

"""Public book lookup routes."""

from fastapi import APIRouter, Depends

from bookscout.api.dependencies import get_catalog
from bookscout.api.schemas import BookDetailResponse, BookResponse
from bookscout.ports.catalog import CatalogPort
from bookscout.services.books import BookService

router = APIRouter(prefix="/books", tags=["Books"])


@router.get("/trending", response_model=list[BookResponse])
async def trending_books(
    catalog: CatalogPort = Depends(get_catalog),
) -> list[BookResponse]:
    """Most-rated books, then best average rating."""
    return await BookService(catalog).trending()


@router.get("/category/{category_name}", response_model=list[BookResponse])
async def category_books(
    category_name: str,
    catalog: CatalogPort = Depends(get_catalog),
) -> list[BookResponse]:
    return await BookService(catalog).by_category(category_name)


@router.get("/{book_id}", response_model=BookDetailResponse)
async def book_details(
    book_id: int,
    catalog: CatalogPort = Depends(get_catalog),
) -> BookDetailResponse:
    return await BookService(catalog).get_details(book_id)

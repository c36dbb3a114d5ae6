"""Wishlist routes."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from bookscout.api.dependencies import get_catalog
from bookscout.api.middleware.auth import get_current_user
from bookscout.api.schemas import (
    WishlistAddRequest,
    WishlistEntryResponse,
    WishlistResponse,
)
from bookscout.database import get_session
from bookscout.domain.models import User
from bookscout.ports.catalog import CatalogPort
from bookscout.services.books import BookService
from bookscout.services.wishlist import WishlistService

router = APIRouter(prefix="/wishlist", tags=["Wishlist"])


@router.get("", response_model=WishlistResponse)
async def get_wishlist(
    session: AsyncSession = Depends(get_session),
    catalog: CatalogPort = Depends(get_catalog),
    user: User = Depends(get_current_user),
) -> WishlistResponse:
    books = await WishlistService(session).list_books(user.id)
    return WishlistResponse(wishlist=await BookService(catalog).present_details(books))


@router.post("", response_model=WishlistEntryResponse, status_code=status.HTTP_201_CREATED)
async def add_to_wishlist(
    data: WishlistAddRequest,
    session: AsyncSession = Depends(get_session),
    user: User = Depends(get_current_user),
) -> WishlistEntryResponse:
    entry = await WishlistService(session).add(user.id, data.book_id)
    return WishlistEntryResponse.model_validate(entry)


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_from_wishlist(
    book_id: int,
    session: AsyncSession = Depends(get_session),
    user: User = Depends(get_current_user),
) -> Response:
    await WishlistService(session).remove(user.id, book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

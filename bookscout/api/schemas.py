"""Pydantic request/response schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

# ── Auth ───────────────────────────────────────────


class SignupRequest(BaseModel):
    email: EmailStr
    username: str = Field(min_length=3, max_length=100)
    password: str = Field(min_length=6, max_length=72)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(max_length=72)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    username: str
    created_at: datetime | None = None


# ── Books ──────────────────────────────────────────


class BookResponse(BaseModel):
    """A book as shown on cards and in lists."""

    book_id: int
    title: str
    average_rating: float | None = None
    ratings_count: int = 0
    description: str | None = None
    authors: str
    isbn13: str | None = None
    genre: str | None = None


class BookDetailResponse(BookResponse):
    publisher: str | None = None
    publication_year: int | None = None
    num_pages: int | None = None
    language_code: str | None = None
    url: str | None = None
    similar_books: list[int] = []


# ── Wishlist ───────────────────────────────────────


class WishlistAddRequest(BaseModel):
    book_id: int


class WishlistEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    book_id: int
    added_at: datetime | None = None


class WishlistResponse(BaseModel):
    wishlist: list[BookDetailResponse]


# ── Interactions ───────────────────────────────────


class InteractionRequest(BaseModel):
    event: str = Field(min_length=1, max_length=50)
    book_id: int


class InteractionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    event: str
    book_id: int
    timestamp: datetime | None = None


# ── Recommendations ────────────────────────────────


class RecommendationsResponse(BaseModel):
    recommendations: list[BookResponse]

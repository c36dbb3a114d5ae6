"""SQLAlchemy ORM models."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase

VIEW_DETAILS_EVENT = "view_details"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    username = Column(String(100), unique=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)


class Author(Base):
    __tablename__ = "authors"

    author_id = Column(String(64), primary_key=True)
    name = Column(String(300), nullable=True)


class Book(Base):
    """A catalog book.

    ``author_ids`` holds the ids of the book's authors in display order.
    ``similar_books`` is the offline-computed similarity list in its stored
    single-quoted form, e.g. ``"['123','456']"``.
    """

    __tablename__ = "books"

    book_id = Column(Integer, primary_key=True, autoincrement=False)
    title = Column(String(500), nullable=False, index=True)
    average_rating = Column(Float, nullable=True)
    ratings_count = Column(Integer, nullable=False, default=0)
    description = Column(Text, nullable=True)
    author_ids = Column(JSON, nullable=False, default=list)
    isbn13 = Column(String(13), nullable=True)
    isbn = Column(String(10), nullable=True)
    genre = Column(String(50), nullable=True, index=True)
    publisher = Column(String(300), nullable=True)
    publication_year = Column(Integer, nullable=True)
    num_pages = Column(Integer, nullable=True)
    language_code = Column(String(20), nullable=True)
    url = Column(String(1000), nullable=True)
    similar_books = Column(Text, nullable=True)


class WishlistEntry(Base):
    __tablename__ = "wishlists"
    __table_args__ = (UniqueConstraint("user_id", "book_id", name="uq_wishlist_user_book"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    book_id = Column(Integer, ForeignKey("books.book_id", ondelete="CASCADE"), nullable=False)
    added_at = Column(DateTime(timezone=True), default=_utcnow)


class Interaction(Base):
    __tablename__ = "interactions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    book_id = Column(Integer, nullable=False)
    event = Column(String(50), nullable=False, index=True)
    timestamp = Column(DateTime(timezone=True), default=_utcnow)


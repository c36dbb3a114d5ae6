"""Initial schema.

Revision ID: 001
Revises:
Create Date: 2025-01-01 00:00:00.000000
"""

import sqlalchemy as sa

from alembic import op

revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Users
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("email", sa.String(255), unique=True, nullable=False, index=True),
        sa.Column("username", sa.String(100), unique=True, nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # Authors
    op.create_table(
        "authors",
        sa.Column("author_id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(300), nullable=True),
    )

    # Books (ids come from the upstream catalog)
    op.create_table(
        "books",
        sa.Column("book_id", sa.Integer, primary_key=True, autoincrement=False),
        sa.Column("title", sa.String(500), nullable=False, index=True),
        sa.Column("average_rating", sa.Float, nullable=True),
        sa.Column("ratings_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("author_ids", sa.JSON, nullable=False),
        sa.Column("isbn13", sa.String(13), nullable=True),
        sa.Column("isbn", sa.String(10), nullable=True),
        sa.Column("genre", sa.String(50), nullable=True, index=True),
        sa.Column("publisher", sa.String(300), nullable=True),
        sa.Column("publication_year", sa.Integer, nullable=True),
        sa.Column("num_pages", sa.Integer, nullable=True),
        sa.Column("language_code", sa.String(20), nullable=True),
        sa.Column("url", sa.String(1000), nullable=True),
        sa.Column("similar_books", sa.Text, nullable=True),
    )
    op.create_index(
        "ix_books_trending", "books", ["ratings_count", "average_rating"]
    )

    # Wishlists: one entry per user per book
    op.create_table(
        "wishlists",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column(
            "user_id",
            sa.Uuid,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "book_id",
            sa.Integer,
            sa.ForeignKey("books.book_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("added_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", "book_id", name="uq_wishlist_user_book"),
    )

    # Interactions (implicit signals for recommendations)
    op.create_table(
        "interactions",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column(
            "user_id",
            sa.Uuid,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("book_id", sa.Integer, nullable=False),
        sa.Column("event", sa.String(50), nullable=False, index=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("interactions")
    op.drop_table("wishlists")
    op.drop_index("ix_books_trending", table_name="books")
    op.drop_table("books")
    op.drop_table("authors")
    op.drop_table("users")

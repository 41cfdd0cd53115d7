"""
Database models for Postboard (authoritative ORM definitions).

Each collection exposed through the document store is one table. Rows carry
no foreign keys: comments reference posts and authors by id only.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, Index, MetaData, PrimaryKeyConstraint, String, Text, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Naming convention for deterministic constraint/index names
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all database models with type checking support."""

    metadata = MetaData(naming_convention=naming_convention)


class Posts(Base):
    __tablename__ = "posts"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="posts_pkey"),
        Index("idx_posts_created_at", "created_at"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    author_id: Mapped[str] = mapped_column(String(255), nullable=False)
    title: Mapped[str | None] = mapped_column(Text)
    content: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(True), nullable=False)


class Comments(Base):
    __tablename__ = "comments"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="comments_pkey"),
        Index("idx_comments_post_created", "post_id", "created_at"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    post_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    author_id: Mapped[str | None] = mapped_column(String(255))
    content: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(True), nullable=False)


target_metadata = Base.metadata

__all__ = ["Base", "Comments", "Posts", "target_metadata"]

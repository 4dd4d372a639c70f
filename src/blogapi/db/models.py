"""SQLAlchemy ORM models — single source of truth for the database schema.

Learn: Declarative ORM mapping with SQLAlchemy 2.0 style (Mapped[] +
mapped_column). Each class = one table; the two many-to-many links
(post_tags, user_roles) are plain association Tables.

Key points:
- BIGINT auto-increment ids (INTEGER on SQLite, which only auto-increments
  an INTEGER PRIMARY KEY)
- tags.name is indexed but NOT unique — deduplication happens in
  TagReconciler, see DESIGN.md for the concurrency caveat
- Post.author is a snapshot of the owner's name/email at creation time
- relationships use lazy="raise" so any read path that forgets to
  eager-load fails loudly instead of issuing IO inside an async session
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# BIGINT in Postgres, INTEGER (rowid alias, autoincrements) in SQLite
BigIntId = BigInteger().with_variant(Integer, "sqlite")

# Largest BIGINT; no row id can exceed it
MAX_ID = 2**63 - 1


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ─── Association tables ─────────────────────────────────

post_tags = Table(
    "post_tags",
    Base.metadata,
    Column("post_id", BigIntId, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", BigIntId, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)

user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", BigIntId, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", BigIntId, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


# ─── Users & roles ──────────────────────────────────────


class User(Base):
    """A registered account. Email is the login key.

    Learn: password_hash holds a bcrypt digest, never the raw password.
    `active` is an integer flag (1 = active) that nothing toggles yet.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False, default="")
    email: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    active: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    # Relationships
    posts: Mapped[list["Post"]] = relationship(back_populates="user", lazy="raise")
    roles: Mapped[list["Role"]] = relationship(
        secondary=user_roles, back_populates="users", lazy="raise"
    )


class Role(Base):
    """Named role. Modelled for the schema only — no route checks it."""

    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)

    users: Mapped[list["User"]] = relationship(
        secondary=user_roles, back_populates="roles", lazy="raise"
    )


# ─── Posts, tags, comments ──────────────────────────────


class Post(Base):
    """A blog post owned by exactly one user.

    Learn: user_id is set once at creation and never reassigned.
    updated_at is stamped at creation only; there is no edit path yet.
    """

    __tablename__ = "posts"
    __table_args__ = (
        Index("ix_posts_user_created", "user_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    excerpt: Mapped[str] = mapped_column(Text, nullable=False, default="")
    context: Mapped[str] = mapped_column(Text, nullable=False, default="")
    published_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    publish_status: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    author: Mapped[str] = mapped_column(String, nullable=False, default="")
    user_id: Mapped[int] = mapped_column(
        BigIntId, ForeignKey("users.id"), nullable=False, index=True
    )

    # Relationships
    user: Mapped["User"] = relationship(back_populates="posts", lazy="raise")
    tags: Mapped[list["Tag"]] = relationship(
        secondary=post_tags, back_populates="posts", lazy="raise"
    )
    comments: Mapped[list["Comment"]] = relationship(
        back_populates="post",
        lazy="raise",
        order_by="Comment.created_at",
        cascade="all, delete-orphan",
    )


class Tag(Base):
    """Free-form label, shared across posts and users."""

    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False, index=True)

    posts: Mapped[list["Post"]] = relationship(
        secondary=post_tags, back_populates="tags", lazy="raise"
    )


class Comment(Base):
    """A comment on a post. Only ever read as part of its Post."""

    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        BigIntId, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    post: Mapped["Post"] = relationship(back_populates="comments", lazy="raise")

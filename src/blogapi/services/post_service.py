"""Post service — creation, owner-scoped listing, and lookup.

Learn: Every query here filters on Post.user_id. The caller's id comes
from the verified token (see auth.dependencies), so a post owned by
someone else is simply not found — get_post() never distinguishes
"exists but not yours" from "does not exist".

Read paths always eager-load tags and comments with selectinload; the
relationships are lazy="raise", so a missing option fails loudly.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Generic, Iterable, Optional, TypeVar

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from blogapi.db.models import Post, User
from blogapi.errors import NotFound, Unauthenticated, ValidationError
from blogapi.services.tag_reconciler import TagReconciler

logger = structlog.get_logger()

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass
class Page(Generic[T]):
    items: list[T]
    page_number: int
    page_size: int
    total_count: int
    total_pages: int


def clamp_paging(
    page_number: Optional[int], page_size: Optional[int], max_page_size: int = MAX_PAGE_SIZE
) -> tuple[int, int]:
    """pageNumber >= 1, 1 <= pageSize <= max_page_size."""
    number = max(1, page_number or 1)
    size = page_size if page_size is not None else DEFAULT_PAGE_SIZE
    size = min(max(1, size), max_page_size)
    return number, size


def author_label(user: User) -> str:
    """Display name snapshot for a new post: name, else email."""
    return user.name if user.name and user.name.strip() else user.email


class PostService:
    """Business logic for posts."""

    def __init__(self, db: AsyncSession, max_page_size: int = MAX_PAGE_SIZE):
        self.db = db
        self.tags = TagReconciler(db)
        self.max_page_size = max_page_size

    async def create_post(
        self,
        user_id: int,
        title: Optional[str],
        excerpt: Optional[str] = None,
        context: Optional[str] = None,
        published_at: Optional[datetime] = None,
        publish_status: bool = False,
        tags: Optional[Iterable[Optional[str]]] = None,
    ) -> Post:
        """Create a post and its tag links in one commit.

        Learn: the post row, any new tag rows, and the post_tags links
        are all flushed inside the same transaction. If anything fails
        before commit, the rollback drops all of them together.
        """
        if title is None or not title.strip():
            raise ValidationError("Title is required.")

        user = await self.db.get(User, user_id)
        if user is None:
            # Valid signature, but the account is gone
            raise Unauthenticated("Authentication required")

        now = datetime.now(timezone.utc)
        try:
            resolved_tags = await self.tags.reconcile(tags or [])
            post = Post(
                title=title,
                excerpt=excerpt or "",
                context=context or "",
                published_at=published_at,
                publish_status=publish_status,
                created_at=now,
                updated_at=now,
                author=author_label(user),
                user_id=user.id,
                tags=resolved_tags,
                comments=[],
            )
            self.db.add(post)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            "posts.created",
            post_id=post.id,
            user_id=user_id,
            tag_count=len(resolved_tags),
        )
        return post

    async def list_posts(
        self,
        user_id: int,
        page_number: Optional[int] = 1,
        page_size: Optional[int] = DEFAULT_PAGE_SIZE,
    ) -> Page[Post]:
        """Newest-first page of the user's posts, with tags and comments."""
        number, size = clamp_paging(page_number, page_size, self.max_page_size)

        total = await self.db.scalar(
            select(func.count()).select_from(Post).where(Post.user_id == user_id)
        )
        total = total or 0
        offset = (number - 1) * size

        items: list[Post] = []
        # Past the last page: nothing to fetch, and a huge pageNumber
        # would overflow the OFFSET bind parameter.
        if offset < total:
            result = await self.db.execute(
                select(Post)
                .where(Post.user_id == user_id)
                .options(selectinload(Post.tags), selectinload(Post.comments))
                # id breaks created_at ties so paging is stable
                .order_by(Post.created_at.desc(), Post.id.desc())
                .offset(offset)
                .limit(size)
            )
            items = list(result.scalars().all())

        return Page(
            items=items,
            page_number=number,
            page_size=size,
            total_count=total,
            total_pages=math.ceil(total / size),
        )

    async def get_post(self, post_id: int, user_id: int) -> Post:
        """One of the user's posts. NotFound if missing or not theirs."""
        result = await self.db.execute(
            select(Post)
            .where(Post.id == post_id, Post.user_id == user_id)
            .options(selectinload(Post.tags), selectinload(Post.comments))
        )
        post = result.scalars().first()
        if post is None:
            raise NotFound("Post not found.")
        return post

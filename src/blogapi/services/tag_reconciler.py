"""Tag reconciliation — free-text labels to Tag rows.

Learn: reconcile() is lookup-or-create. Names are trimmed, blanks are
dropped, and matching is case-insensitive ("Go" reuses an existing "go").
Tags created during the call are remembered in a local dict, so the same
new name appearing twice in one request resolves to one pending Tag
instead of two inserts.

Case folding happens in two places: Python's str.lower() for the
in-call dict, SQL lower() for the store lookup. PostgreSQL's lower() is
Unicode-aware, so both agree. SQLite's built-in lower() only folds
ASCII, so on SQLite a stored "Äpfel" is not matched by "äpfel" and a
second row is created. ASCII names behave the same on both backends.

The lookup-then-insert is not atomic across requests: two requests
inventing the same tag at the same time can both insert it. See
DESIGN.md ("Tag uniqueness race").
"""

from collections.abc import Iterable
from typing import Optional

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.db.models import Tag

logger = structlog.get_logger()


def normalize_tag_name(raw: Optional[str]) -> str:
    return (raw or "").strip()


class TagReconciler:
    """Resolves raw tag names to existing or new Tag entities."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def reconcile(self, raw_names: Iterable[Optional[str]]) -> list[Tag]:
        """Return one Tag per distinct name, in first-seen order.

        New tags are added to the session but not committed; the caller
        commits them together with whatever references them.
        """
        resolved: dict[str, Tag] = {}

        for raw in raw_names:
            name = normalize_tag_name(raw)
            if not name:
                continue

            key = name.lower()
            if key in resolved:
                continue

            tag = await self._find(name)
            if tag is None:
                tag = Tag(name=name)
                self.db.add(tag)
                logger.info("tags.created", name=name)
            resolved[key] = tag

        return list(resolved.values())

    async def _find(self, name: str) -> Tag | None:
        result = await self.db.execute(
            select(Tag)
            .where(func.lower(Tag.name) == name.lower())
            .order_by(Tag.id)
            .limit(1)
        )
        return result.scalars().first()

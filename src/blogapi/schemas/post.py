"""Pydantic schemas for posts, tags, and comments.

Separate "Create" schemas (input) from "Read" schemas (output). Read
schemas are built from ORM objects (from_attributes) that the service
has already fully loaded.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from blogapi.schemas.base import ApiModel


class TagRead(ApiModel):
    id: int
    name: str


class CommentRead(ApiModel):
    id: int
    post_id: int
    content: str
    created_at: datetime


class PostCreate(ApiModel):
    title: Optional[str] = None
    excerpt: Optional[str] = None
    context: Optional[str] = None
    published_at: Optional[datetime] = None
    publish_status: bool = False
    tags: Optional[list[Optional[str]]] = None


class PostRead(ApiModel):
    id: int
    title: str
    excerpt: str
    context: str
    published_at: Optional[datetime] = None
    publish_status: bool
    created_at: datetime
    updated_at: datetime
    author: str
    user_id: int
    tags: list[TagRead] = Field(default_factory=list)
    comments: list[CommentRead] = Field(default_factory=list)


class PostPage(ApiModel):
    items: list[PostRead]
    page_number: int
    page_size: int
    total_count: int
    total_pages: int

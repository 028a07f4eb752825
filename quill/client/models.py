from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from quill.constants import DEFAULT_CATEGORY_COLOR, PostStatus


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class Author(_Frozen):
    id: str
    username: str
    avatar: str | None = None
    bio: str | None = None


class Category(_Frozen):
    id: str
    name: str
    slug: str
    color: str = DEFAULT_CATEGORY_COLOR
    description: str | None = None


class Post(_Frozen):
    id: str
    title: str
    content: str
    excerpt: str | None = None
    status: PostStatus = PostStatus.DRAFT
    tags: tuple[str, ...] = ()
    categories: tuple[Category, ...] = ()
    featured_image: str | None = None
    views: int = 0
    author: Author
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Pagination(_Frozen):
    page: int
    pages: int
    total: int

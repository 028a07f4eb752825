"""Post queries and mutations with capability checks."""
from __future__ import annotations

from typing import Any, Mapping

import structlog

from quill.errors import FieldError, ForbiddenError, NotFoundError, ValidationFailed
from quill.models import Category, Post, User
from quill.repositories import blog as repo
from quill.schemas.listing import ListingQuery, ResultEnvelope
from quill.schemas.posts import POST_FIELDS, PostCreate, PostUpdate, parse_post

log = structlog.get_logger(__name__)

POST_NOT_FOUND = "Post not found"


def can_modify(user: User, post: Post) -> bool:
    """Author-or-admin capability check."""
    return post.author_id == user.id or user.is_admin


def list_posts(query: ListingQuery) -> ResultEnvelope[Post]:
    items, total = repo.list_posts(query)
    return ResultEnvelope(items=items, page=query.page, limit=query.limit, total_count=total)


def get_post(hex_id: str) -> Post:
    """Fetch one post for reading. Every call counts as a view."""
    post = repo.get_post_by_hex_id(hex_id)
    if not post:
        raise NotFoundError(POST_NOT_FOUND)
    return repo.increment_post_views(post)


def create_post(author: User, data: Mapping[str, Any]) -> Post:
    payload = parse_post(PostCreate, dict(data))
    categories = _resolve_categories(payload.categories)
    post = repo.create_post(
        title=payload.title,
        content=payload.content,
        excerpt=payload.excerpt,
        status=payload.status.value,
        tags=payload.tags,
        categories=categories,
        featured_image=payload.featured_image,
        author_id=author.id,
    )
    log.info("post_created", post_id=post.hex_id, author_id=author.hex_id, status=post.status)
    return post


def update_post(caller: User, hex_id: str, data: Mapping[str, Any]) -> Post:
    post = _get_modifiable(caller, hex_id, action="update")
    # Merge with existing so a partial payload is validated as a whole post
    merged = _current_fields(post)
    merged.update({k: v for k, v in data.items() if k in POST_FIELDS})
    payload = parse_post(PostUpdate, merged)
    categories = _resolve_categories(payload.categories)
    post = repo.update_post(
        post,
        title=payload.title,
        content=payload.content,
        excerpt=payload.excerpt,
        status=payload.status.value,
        tags=payload.tags,
        categories=categories,
        featured_image=payload.featured_image,
    )
    log.info("post_updated", post_id=post.hex_id, caller_id=caller.hex_id, fields=sorted(set(data) & set(POST_FIELDS)))
    return post


def delete_post(caller: User, hex_id: str) -> None:
    post = _get_modifiable(caller, hex_id, action="delete")
    repo.delete_post(post)
    log.info("post_deleted", post_id=hex_id, caller_id=caller.hex_id)


def _get_modifiable(caller: User, hex_id: str, *, action: str) -> Post:
    post = repo.get_post_by_hex_id(hex_id)
    if not post:
        raise NotFoundError(POST_NOT_FOUND)
    if not can_modify(caller, post):
        log.warning("post_forbidden", post_id=hex_id, caller_id=caller.hex_id, action=action)
        raise ForbiddenError(f"Not authorized to {action} this post")
    return post


def _current_fields(post: Post) -> dict[str, Any]:
    return {
        "title": post.title,
        "content": post.content,
        "excerpt": post.excerpt,
        "status": post.status,
        "tags": list(post.tags),
        "categories": [c.hex_id for c in post.categories],
        "featured_image": post.featured_image,
    }


def _resolve_categories(hex_ids: list[str]) -> list[Category]:
    found = repo.get_categories_by_hex_ids(hex_ids)
    if len(found) != len(hex_ids):
        known = {c.hex_id for c in found}
        missing = ", ".join(h for h in hex_ids if h not in known)
        raise ValidationFailed([FieldError(path="categories", msg=f"Unknown category: {missing}")])
    return found

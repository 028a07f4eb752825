"""JSON shapes for API responses.

Author fields never include email or password hash.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any

from quill.models import Category, Post, User


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def author_to_dict(user: User, detail: bool = False) -> dict[str, Any]:
    data = {"id": user.hex_id, "username": user.username, "avatar": user.avatar}
    if detail:
        data["bio"] = user.bio
    return data


def category_to_dict(cat: Category, detail: bool = False) -> dict[str, Any]:
    data = {"id": cat.hex_id, "name": cat.name, "slug": cat.slug, "color": cat.color}
    if detail:
        data.update(
            {
                "description": cat.description,
                "created_at": _iso(cat.created_at),
                "updated_at": _iso(cat.updated_at),
            }
        )
    return data


def post_to_dict(post: Post, detail: bool = False) -> dict[str, Any]:
    return {
        "id": post.hex_id,
        "title": post.title,
        "excerpt": post.excerpt,
        "content": post.content,
        "status": post.status,
        "tags": list(post.tags),
        "categories": [category_to_dict(c, detail=detail) for c in post.categories],
        "featured_image": post.featured_image,
        "views": post.views,
        "author": author_to_dict(post.author, detail=detail),
        "created_at": _iso(post.created_at),
        "updated_at": _iso(post.updated_at),
    }


def user_to_dict(user: User) -> dict[str, Any]:
    """Profile of the logged-in caller."""
    return {
        "id": user.hex_id,
        "username": user.username,
        "email": user.email,
        "role": user.role,
        "avatar": user.avatar,
        "bio": user.bio,
    }

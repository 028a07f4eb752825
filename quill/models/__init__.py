from __future__ import annotations

import secrets
from datetime import datetime, timezone


def generate_hex_id(length: int = 24) -> str:
    """Generate a secure random hex string of specified length."""
    return secrets.token_hex(length // 2)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Import all models so metadata is complete for create_all and migrations
from quill.constants import PostStatus, UserRole
from quill.models.user import User
from quill.models.blog import Category, Post, PostTag, post_categories

__all__ = [
    "generate_hex_id",
    "utcnow",
    "User",
    "UserRole",
    "Category",
    "Post",
    "PostStatus",
    "PostTag",
    "post_categories",
]

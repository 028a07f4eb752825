from __future__ import annotations

# Re-export common schema classes for convenient imports
from .auth import LoginRequest  # noqa: F401
from .categories import CategoryCreate, CategoryUpdate, parse_category  # noqa: F401
from .listing import ListingQuery, ResultEnvelope, parse_listing_query  # noqa: F401
from .posts import PostCreate, PostField, PostUpdate, parse_post  # noqa: F401

__all__ = [
    # auth
    "LoginRequest",
    # categories
    "CategoryCreate",
    "CategoryUpdate",
    "parse_category",
    # listing
    "ListingQuery",
    "ResultEnvelope",
    "parse_listing_query",
    # posts
    "PostCreate",
    "PostField",
    "PostUpdate",
    "parse_post",
]

"""Async client for the blog API and the post store that caches its results."""
from __future__ import annotations

from quill.client.api import BlogApi, PostPage
from quill.client.errors import ApiError, MalformedResponseError, NetworkError
from quill.client.models import Category, Pagination, Post
from quill.client.store import PostState, PostStore, post_reducer

__all__ = [
    "ApiError",
    "BlogApi",
    "Category",
    "MalformedResponseError",
    "NetworkError",
    "Pagination",
    "Post",
    "PostPage",
    "PostState",
    "PostStore",
    "post_reducer",
]

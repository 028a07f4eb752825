"""Async HTTP client for the blog REST API."""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, Mapping

import httpx
import structlog
from pydantic import ValidationError

from quill.client.errors import ApiError, MalformedResponseError, NetworkError
from quill.client.models import Category, Pagination, Post

log = structlog.get_logger(__name__)

POSTS_PATH = "/api/posts"
CATEGORIES_PATH = "/api/categories"
AUTH_PATH = "/api/auth"


@dataclass(frozen=True)
class PostPage:
    items: tuple[Post, ...]
    pagination: Pagination


@contextmanager
def _envelope(path: str) -> Iterator[None]:
    """Raise MalformedResponseError for a success body of the wrong shape."""
    try:
        yield
    except (KeyError, TypeError, ValidationError) as e:
        log.warning("api_malformed_response", path=path, error=str(e))
        raise MalformedResponseError(f"{path}: {e}") from e


class BlogApi:
    """Client for the posts, categories and auth endpoints.

    Session cookies from ``login`` are kept on the underlying
    ``httpx.AsyncClient`` and sent with later mutations.

    Every failure surfaces as ``ApiError``: failure envelopes directly,
    transport errors as ``NetworkError`` and success bodies that do not
    match the envelope as ``MalformedResponseError``.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    async def __aenter__(self) -> "BlogApi":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> dict[str, Any]:
        try:
            response = await self._client.request(method, path, params=params, json=json)
        except httpx.TransportError as e:
            log.warning("api_transport_error", method=method, path=path, error=str(e))
            raise NetworkError(str(e)) from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.is_error or not body.get("success", False):
            raise ApiError(
                body.get("message"),
                status_code=response.status_code,
                errors=body.get("errors") or (),
            )
        return body

    # Posts
    async def list_posts(
        self,
        *,
        page: int = 1,
        limit: int = 10,
        category: str | None = None,
        tag: str | None = None,
        search: str | None = None,
    ) -> PostPage:
        params = {"page": page, "limit": limit, "category": category, "tag": tag, "search": search}
        body = await self._request(
            "GET", POSTS_PATH, params={k: v for k, v in params.items() if v is not None}
        )
        with _envelope(POSTS_PATH):
            return PostPage(
                items=tuple(Post.model_validate(p) for p in body["data"]),
                pagination=Pagination.model_validate(body["pagination"]),
            )

    async def get_post(self, post_id: str) -> Post:
        path = f"{POSTS_PATH}/{post_id}"
        body = await self._request("GET", path)
        with _envelope(path):
            return Post.model_validate(body["data"])

    async def create_post(self, data: Mapping[str, Any]) -> Post:
        body = await self._request("POST", POSTS_PATH, json=dict(data))
        with _envelope(POSTS_PATH):
            return Post.model_validate(body["data"])

    async def update_post(self, post_id: str, data: Mapping[str, Any]) -> Post:
        path = f"{POSTS_PATH}/{post_id}"
        body = await self._request("PUT", path, json=dict(data))
        with _envelope(path):
            return Post.model_validate(body["data"])

    async def delete_post(self, post_id: str) -> None:
        await self._request("DELETE", f"{POSTS_PATH}/{post_id}")

    # Categories
    async def list_categories(self) -> tuple[Category, ...]:
        body = await self._request("GET", CATEGORIES_PATH)
        with _envelope(CATEGORIES_PATH):
            return tuple(Category.model_validate(c) for c in body["data"])

    # Auth
    async def login(self, username: str, password: str) -> dict[str, Any]:
        path = f"{AUTH_PATH}/login"
        body = await self._request("POST", path, json={"username": username, "password": password})
        with _envelope(path):
            return dict(body["data"])

    async def logout(self) -> None:
        await self._request("POST", f"{AUTH_PATH}/logout")

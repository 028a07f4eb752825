"""Client-side post store.

``PostState`` is an immutable snapshot. ``post_reducer`` is the only way a
new snapshot is produced, and ``PostStore`` is the single owner that runs
API calls and feeds their outcomes through the reducer.

Mutations go to the server first; the local list changes only once the
server confirms, so there is never anything to roll back.

List fetches are tagged with an increasing request id. A fetch that resolves
after a newer one was started is discarded, so the most recently issued
fetch decides what the list shows regardless of the order responses arrive.
"""
from __future__ import annotations

import itertools
from dataclasses import dataclass, replace
from typing import Any, Callable, Mapping

import structlog

from quill.client.api import BlogApi, PostPage
from quill.client.errors import ApiError
from quill.client.models import Category, Pagination, Post
from quill.constants import POSTS_PER_PAGE

log = structlog.get_logger(__name__)

FETCH_POSTS_FAILED = "Failed to fetch posts"
FETCH_POST_FAILED = "Failed to fetch post"
CREATE_POST_FAILED = "Failed to create post"
UPDATE_POST_FAILED = "Failed to update post"
DELETE_POST_FAILED = "Failed to delete post"
FETCH_CATEGORIES_FAILED = "Failed to fetch categories"


@dataclass(frozen=True)
class PostState:
    items: tuple[Post, ...] = ()
    pagination: Pagination | None = None
    categories: tuple[Category, ...] = ()
    loading: bool = False
    error: str | None = None
    # id of the most recently started list fetch
    latest_request: int = 0


# Actions
@dataclass(frozen=True)
class FetchStarted:
    request_id: int


@dataclass(frozen=True)
class FetchSucceeded:
    request_id: int
    items: tuple[Post, ...]
    pagination: Pagination


@dataclass(frozen=True)
class FetchFailed:
    request_id: int
    message: str


@dataclass(frozen=True)
class CategoriesLoaded:
    categories: tuple[Category, ...]


@dataclass(frozen=True)
class PostCreated:
    post: Post


@dataclass(frozen=True)
class PostUpdated:
    post: Post


@dataclass(frozen=True)
class PostDeleted:
    post_id: str


@dataclass(frozen=True)
class OperationFailed:
    message: str


@dataclass(frozen=True)
class ErrorCleared:
    pass


Action = (
    FetchStarted
    | FetchSucceeded
    | FetchFailed
    | CategoriesLoaded
    | PostCreated
    | PostUpdated
    | PostDeleted
    | OperationFailed
    | ErrorCleared
)


def post_reducer(state: PostState, action: Action) -> PostState:
    if isinstance(action, FetchStarted):
        return replace(state, loading=True, latest_request=action.request_id)

    if isinstance(action, FetchSucceeded):
        if action.request_id != state.latest_request:
            return state
        return replace(state, items=tuple(action.items), pagination=action.pagination, loading=False)

    if isinstance(action, FetchFailed):
        if action.request_id != state.latest_request:
            return state
        # keep the last good page on screen
        return replace(state, error=action.message, loading=False)

    if isinstance(action, CategoriesLoaded):
        return replace(state, categories=tuple(action.categories))

    if isinstance(action, PostCreated):
        return replace(state, items=(action.post, *state.items))

    if isinstance(action, PostUpdated):
        return replace(
            state,
            items=tuple(action.post if p.id == action.post.id else p for p in state.items),
        )

    if isinstance(action, PostDeleted):
        return replace(state, items=tuple(p for p in state.items if p.id != action.post_id))

    if isinstance(action, OperationFailed):
        return replace(state, error=action.message)

    if isinstance(action, ErrorCleared):
        return replace(state, error=None)

    return state


def error_message(error: Exception, fallback: str) -> str:
    """Server-provided message when there is one, else the per-operation fallback."""
    if isinstance(error, ApiError) and error.message:
        return error.message
    return fallback


Listener = Callable[[PostState], None]


class PostStore:
    def __init__(self, api: BlogApi, state: PostState | None = None) -> None:
        self._api = api
        self._state = state or PostState()
        self._request_ids = itertools.count(self._state.latest_request + 1)
        self._listeners: list[Listener] = []

    @property
    def state(self) -> PostState:
        return self._state

    def dispatch(self, action: Action) -> PostState:
        self._state = post_reducer(self._state, action)
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after every dispatch; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def fetch_posts(
        self,
        *,
        page: int = 1,
        limit: int = POSTS_PER_PAGE,
        category: str | None = None,
        tag: str | None = None,
        search: str | None = None,
    ) -> PostPage:
        request_id = next(self._request_ids)
        self.dispatch(FetchStarted(request_id))
        try:
            result = await self._api.list_posts(
                page=page, limit=limit, category=category, tag=tag, search=search
            )
        except ApiError as e:
            self.dispatch(FetchFailed(request_id, error_message(e, FETCH_POSTS_FAILED)))
            raise
        if request_id != self._state.latest_request:
            log.info("stale_fetch_discarded", request_id=request_id, latest=self._state.latest_request)
        self.dispatch(FetchSucceeded(request_id, result.items, result.pagination))
        return result

    async def fetch_post(self, post_id: str) -> Post:
        """Fetch one post for a detail or edit view without touching the list."""
        try:
            return await self._api.get_post(post_id)
        except ApiError as e:
            self.dispatch(OperationFailed(error_message(e, FETCH_POST_FAILED)))
            raise

    async def create_post(self, data: Mapping[str, Any]) -> Post:
        try:
            post = await self._api.create_post(data)
        except ApiError as e:
            self.dispatch(OperationFailed(error_message(e, CREATE_POST_FAILED)))
            raise
        self.dispatch(PostCreated(post))
        return post

    async def update_post(self, post_id: str, data: Mapping[str, Any]) -> Post:
        try:
            post = await self._api.update_post(post_id, data)
        except ApiError as e:
            self.dispatch(OperationFailed(error_message(e, UPDATE_POST_FAILED)))
            raise
        self.dispatch(PostUpdated(post))
        return post

    async def delete_post(self, post_id: str) -> None:
        try:
            await self._api.delete_post(post_id)
        except ApiError as e:
            self.dispatch(OperationFailed(error_message(e, DELETE_POST_FAILED)))
            raise
        self.dispatch(PostDeleted(post_id))

    async def fetch_categories(self) -> tuple[Category, ...]:
        try:
            categories = await self._api.list_categories()
        except ApiError as e:
            self.dispatch(OperationFailed(error_message(e, FETCH_CATEGORIES_FAILED)))
            raise
        self.dispatch(CategoriesLoaded(categories))
        return categories

    def clear_error(self) -> None:
        self.dispatch(ErrorCleared())

"""Tests for the client-side post store and its reducer."""

import asyncio

import httpx
import pytest

from quill.client.api import BlogApi, PostPage
from quill.client.errors import ApiError, MalformedResponseError, NetworkError
from quill.client.models import Author, Category, Pagination, Post
from quill.client.store import (
    CategoriesLoaded,
    ErrorCleared,
    FetchFailed,
    FetchStarted,
    FetchSucceeded,
    OperationFailed,
    PostCreated,
    PostDeleted,
    PostState,
    PostStore,
    PostUpdated,
    error_message,
    post_reducer,
)

AUTHOR = Author(id='a1', username='author')


def _post(post_id: str, title: str | None = None) -> Post:
    return Post(id=post_id, title=title or f'Post {post_id}', content='Body', author=AUTHOR)


def _page(*ids: str, total: int | None = None) -> PostPage:
    total = len(ids) if total is None else total
    return PostPage(
        items=tuple(_post(i) for i in ids),
        pagination=Pagination(page=1, pages=1 if total else 0, total=total),
    )


class FakeApi:
    """Stands in for BlogApi; each method returns or raises what the test set."""

    def __init__(self):
        self.results = {}
        self.calls = []

    async def _respond(self, name, *args, **kwargs):
        self.calls.append((name, args, kwargs))
        result = self.results[name]
        if isinstance(result, Exception):
            raise result
        return result

    async def list_posts(self, **kwargs):
        return await self._respond('list_posts', **kwargs)

    async def get_post(self, post_id):
        return await self._respond('get_post', post_id)

    async def create_post(self, data):
        return await self._respond('create_post', data)

    async def update_post(self, post_id, data):
        return await self._respond('update_post', post_id, data)

    async def delete_post(self, post_id):
        return await self._respond('delete_post', post_id)

    async def list_categories(self):
        return await self._respond('list_categories')


class TestPostReducer:

    def test_fetch_started_sets_loading(self):
        state = post_reducer(PostState(), FetchStarted(1))

        assert state.loading is True
        assert state.latest_request == 1

    def test_fetch_succeeded_replaces_items(self):
        page = _page('p1', 'p2')
        state = post_reducer(PostState(items=(_post('old'),), latest_request=1, loading=True),
                             FetchSucceeded(1, page.items, page.pagination))

        assert [p.id for p in state.items] == ['p1', 'p2']
        assert state.pagination.total == 2
        assert state.loading is False

    def test_failed_fetch_keeps_items(self):
        items = (_post('p1'), _post('p2'))
        state = PostState(items=items, latest_request=3, loading=True)

        state = post_reducer(state, FetchFailed(3, 'Failed to fetch posts'))

        assert state.items == items
        assert state.error == 'Failed to fetch posts'
        assert state.loading is False

    def test_stale_results_are_ignored(self):
        state = PostState(items=(_post('new'),), latest_request=2)
        stale = _page('old')

        assert post_reducer(state, FetchSucceeded(1, stale.items, stale.pagination)) is state
        assert post_reducer(state, FetchFailed(1, 'boom')) is state

    def test_created_post_is_prepended(self):
        state = PostState(items=(_post('p1'), _post('p2')))

        state = post_reducer(state, PostCreated(_post('p3')))

        assert [p.id for p in state.items] == ['p3', 'p1', 'p2']

    def test_update_replaces_in_place(self):
        state = PostState(items=(_post('p1'), _post('p2'), _post('p3')))

        state = post_reducer(state, PostUpdated(_post('p2', 'Renamed')))

        assert [p.id for p in state.items] == ['p1', 'p2', 'p3']
        assert state.items[1].title == 'Renamed'

    def test_update_of_unlisted_post_changes_nothing(self):
        state = PostState(items=(_post('p1'),))

        assert post_reducer(state, PostUpdated(_post('zz'))).items == state.items

    def test_delete_keeps_order_of_the_rest(self):
        state = PostState(items=(_post('p1'), _post('p2'), _post('p3')))

        state = post_reducer(state, PostDeleted('p2'))

        assert [p.id for p in state.items] == ['p1', 'p3']

    def test_operation_failure_leaves_loading_alone(self):
        state = post_reducer(PostState(loading=True), OperationFailed('Failed to delete post'))

        assert state.error == 'Failed to delete post'
        assert state.loading is True

    def test_error_cleared(self):
        assert post_reducer(PostState(error='x'), ErrorCleared()).error is None

    def test_categories_loaded(self):
        cats = (Category(id='c1', name='Tech', slug='tech'),)

        assert post_reducer(PostState(), CategoriesLoaded(cats)).categories == cats

    def test_unknown_action_is_a_no_op(self):
        state = PostState()
        assert post_reducer(state, object()) is state

    def test_input_state_is_not_mutated(self):
        state = PostState(items=(_post('p1'),))
        post_reducer(state, PostCreated(_post('p2')))

        assert [p.id for p in state.items] == ['p1']


class TestErrorMessage:

    def test_server_message_wins(self):
        assert error_message(ApiError('Post not found', status_code=404), 'fallback') == 'Post not found'

    def test_fallback_without_message(self):
        assert error_message(ApiError(status_code=500), 'Failed to fetch posts') == 'Failed to fetch posts'
        assert error_message(NetworkError('connection refused'), 'Failed to fetch post') == 'Failed to fetch post'


class TestPostStore:

    def test_fetch_posts(self):
        api = FakeApi()
        api.results['list_posts'] = _page('p1', 'p2', total=12)
        store = PostStore(api)

        page = asyncio.run(store.fetch_posts(page=2, limit=10, category='tech'))

        assert page.pagination.total == 12
        assert [p.id for p in store.state.items] == ['p1', 'p2']
        assert store.state.loading is False
        assert api.calls[0][2] == {'page': 2, 'limit': 10, 'category': 'tech', 'tag': None, 'search': None}

    def test_fetch_failure_sets_error_and_reraises(self):
        api = FakeApi()
        api.results['list_posts'] = ApiError(status_code=500)
        store = PostStore(api, PostState(items=(_post('p1'),)))

        with pytest.raises(ApiError):
            asyncio.run(store.fetch_posts())

        assert store.state.error == 'Failed to fetch posts'
        assert [p.id for p in store.state.items] == ['p1']
        assert store.state.loading is False

    def test_malformed_response_does_not_leave_loading_set(self):
        api = FakeApi()
        api.results['list_posts'] = MalformedResponseError('/api/posts: missing data')
        store = PostStore(api, PostState(items=(_post('p1'),)))

        with pytest.raises(MalformedResponseError):
            asyncio.run(store.fetch_posts())

        assert store.state.loading is False
        assert store.state.error == 'Failed to fetch posts'
        assert [p.id for p in store.state.items] == ['p1']

    def test_success_body_without_data_through_real_client(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={'success': True}))
        api = BlogApi('http://test', client=httpx.AsyncClient(transport=transport, base_url='http://test'))
        store = PostStore(api)

        with pytest.raises(ApiError):
            asyncio.run(store.fetch_posts())

        assert store.state.loading is False
        assert store.state.error == 'Failed to fetch posts'

    def test_create_prepends_after_server_confirms(self):
        api = FakeApi()
        api.results['create_post'] = _post('p9')
        store = PostStore(api, PostState(items=(_post('p1'),)))

        asyncio.run(store.create_post({'title': 'New', 'content': 'Body'}))

        assert [p.id for p in store.state.items] == ['p9', 'p1']

    def test_failed_create_leaves_list_untouched(self):
        api = FakeApi()
        api.results['create_post'] = ApiError(
            'Validation failed', status_code=400, errors=[{'path': 'title', 'msg': 'Title is required'}]
        )
        store = PostStore(api, PostState(items=(_post('p1'),)))

        with pytest.raises(ApiError) as exc:
            asyncio.run(store.create_post({'title': ''}))

        assert exc.value.status_code == 400
        assert store.state.error == 'Validation failed'
        assert [p.id for p in store.state.items] == ['p1']

    def test_update(self):
        api = FakeApi()
        api.results['update_post'] = _post('p1', 'Renamed')
        store = PostStore(api, PostState(items=(_post('p1'), _post('p2'))))

        asyncio.run(store.update_post('p1', {'title': 'Renamed'}))

        assert store.state.items[0].title == 'Renamed'

    def test_forbidden_update_reports_server_message(self):
        api = FakeApi()
        api.results['update_post'] = ApiError('Not authorized to update this post', status_code=403)
        store = PostStore(api, PostState(items=(_post('p1'),)))

        with pytest.raises(ApiError):
            asyncio.run(store.update_post('p1', {'title': 'x'}))

        assert store.state.error == 'Not authorized to update this post'
        assert store.state.items[0].title == 'Post p1'

    def test_delete(self):
        api = FakeApi()
        api.results['delete_post'] = None
        store = PostStore(api, PostState(items=(_post('p1'), _post('p2'))))

        asyncio.run(store.delete_post('p1'))

        assert [p.id for p in store.state.items] == ['p2']

    def test_network_failure_on_delete_uses_fallback(self):
        api = FakeApi()
        api.results['delete_post'] = NetworkError('connection reset')
        store = PostStore(api, PostState(items=(_post('p1'),)))

        with pytest.raises(NetworkError):
            asyncio.run(store.delete_post('p1'))

        assert store.state.error == 'Failed to delete post'
        assert [p.id for p in store.state.items] == ['p1']

    def test_fetch_post_does_not_touch_list(self):
        api = FakeApi()
        api.results['get_post'] = _post('p7')
        store = PostStore(api, PostState(items=(_post('p1'),)))

        post = asyncio.run(store.fetch_post('p7'))

        assert post.id == 'p7'
        assert [p.id for p in store.state.items] == ['p1']

    def test_fetch_categories(self):
        api = FakeApi()
        api.results['list_categories'] = (Category(id='c1', name='Tech', slug='tech'),)
        store = PostStore(api)

        asyncio.run(store.fetch_categories())

        assert store.state.categories[0].slug == 'tech'

    def test_subscribe_and_unsubscribe(self):
        store = PostStore(FakeApi())
        seen = []
        unsubscribe = store.subscribe(seen.append)

        store.dispatch(OperationFailed('x'))
        unsubscribe()
        store.clear_error()

        assert len(seen) == 1
        assert seen[0].error == 'x'
        assert store.state.error is None


class SlowApi:
    """list_posts blocks until the test releases the matching request."""

    def __init__(self):
        self.gates = {}
        self.pages = {}

    async def list_posts(self, *, page, **kwargs):
        await self.gates[page].wait()
        return self.pages[page]


class TestOverlappingFetches:

    def test_latest_request_wins_when_older_resolves_last(self):
        api = SlowApi()
        api.pages = {1: _page('page1'), 2: _page('page2')}
        store = PostStore(api)

        async def scenario():
            api.gates = {1: asyncio.Event(), 2: asyncio.Event()}
            first = asyncio.create_task(store.fetch_posts(page=1))
            second = asyncio.create_task(store.fetch_posts(page=2))
            await asyncio.sleep(0)

            api.gates[2].set()
            await second
            api.gates[1].set()
            await first

        asyncio.run(scenario())

        assert [p.id for p in store.state.items] == ['page2']
        assert store.state.loading is False

    def test_stale_failure_does_not_set_error(self):
        api = SlowApi()
        api.pages = {2: _page('page2')}
        store = PostStore(api)

        async def failing_then_ok():
            api.gates = {1: asyncio.Event(), 2: asyncio.Event()}
            original = api.list_posts

            async def list_posts(*, page, **kwargs):
                if page == 1:
                    await api.gates[1].wait()
                    raise ApiError(status_code=502)
                return await original(page=page, **kwargs)

            api.list_posts = list_posts
            first = asyncio.create_task(store.fetch_posts(page=1))
            second = asyncio.create_task(store.fetch_posts(page=2))
            await asyncio.sleep(0)

            api.gates[2].set()
            await second
            api.gates[1].set()
            with pytest.raises(ApiError):
                await first

        asyncio.run(failing_then_ok())

        assert store.state.error is None
        assert [p.id for p in store.state.items] == ['page2']

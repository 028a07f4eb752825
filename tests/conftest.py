"""Test configuration and fixtures for the blog API and client store."""

import itertools
from datetime import datetime, timedelta, timezone
from typing import Generator

import pytest
from flask import Flask
from flask.testing import FlaskClient
from sqlalchemy.pool import StaticPool

from quill import create_app
from quill.constants import PostStatus, UserRole
from quill.extensions import db
from quill.models import Category, Post, User
from quill.utils.crypto import hash_password

BASE_TIME = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def app() -> Generator[Flask, None, None]:
    """Create and configure a test Flask application."""
    # Use in-memory SQLite for each test
    test_config = {
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'SQLALCHEMY_ENGINE_OPTIONS': {
            'poolclass': StaticPool,
            'connect_args': {'check_same_thread': False}
        },
        'SECRET_KEY': 'test-secret-key',
        'SESSION_COOKIE_SECURE': False,
        'RATELIMIT_ENABLED': False,  # Disable rate limiting for tests
        'CACHE_TYPE': 'SimpleCache',
        'CACHE_DEFAULT_TIMEOUT': 300,
        'LOG_LEVEL': 'WARNING',
    }

    app = create_app(test_config)

    with app.app_context():
        db.create_all()
        yield app

        # Cleanup
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create a test client."""
    return app.test_client()


@pytest.fixture
def runner(app: Flask):
    """Create a test CLI runner."""
    return app.test_cli_runner()


def _make_user(username: str, role: UserRole = UserRole.USER) -> User:
    user = User(
        username=username,
        email=f'{username}@example.com',
        password_hash=hash_password('password123', rounds=4),
        role=role.value,
        avatar=f'{username}.png',
        bio=f'About {username}',
    )
    db.session.add(user)
    db.session.commit()
    db.session.refresh(user)
    return user


@pytest.fixture
def author(app: Flask) -> User:
    """A regular user who writes the test posts."""
    return _make_user('author')


@pytest.fixture
def other_user(app: Flask) -> User:
    """A regular user who owns nothing."""
    return _make_user('reader')


@pytest.fixture
def admin_user(app: Flask) -> User:
    return _make_user('admin', UserRole.ADMIN)


@pytest.fixture
def tech_category(app: Flask) -> Category:
    category = Category(name='Tech', description='Technology posts', color='#0d6efd')
    db.session.add(category)
    db.session.commit()
    db.session.refresh(category)
    return category


@pytest.fixture
def science_category(app: Flask) -> Category:
    category = Category(name='Science')
    db.session.add(category)
    db.session.commit()
    db.session.refresh(category)
    return category


@pytest.fixture
def make_post(app: Flask, author: User):
    """Factory for posts; each call is one minute newer than the previous one."""
    counter = itertools.count()

    def _make(
        title: str | None = None,
        *,
        content: str = 'Post body',
        excerpt: str | None = None,
        status: PostStatus = PostStatus.PUBLISHED,
        tags: tuple[str, ...] = (),
        categories: tuple[Category, ...] = (),
        owner: User | None = None,
        created_at: datetime | None = None,
    ) -> Post:
        n = next(counter)
        post = Post(
            title=title or f'Post {n}',
            content=content,
            excerpt=excerpt,
            status=status.value,
            author_id=(owner or author).id,
            created_at=created_at or BASE_TIME + timedelta(minutes=n),
        )
        post.tags = list(tags)
        post.categories = list(categories)
        db.session.add(post)
        db.session.commit()
        db.session.refresh(post)
        return post

    return _make


@pytest.fixture
def test_post(make_post, tech_category: Category) -> Post:
    return make_post(
        'Test Post',
        content='This is a test post content.',
        excerpt='Test post excerpt',
        tags=('python', 'flask'),
        categories=(tech_category,),
    )


def _login(app: Flask, user: User) -> FlaskClient:
    client = app.test_client()
    with client.session_transaction() as sess:
        sess['_user_id'] = str(user.id)
        sess['_fresh'] = True
    return client


@pytest.fixture
def author_client(app: Flask, author: User) -> FlaskClient:
    """Client logged in as the post author."""
    return _login(app, author)


@pytest.fixture
def other_client(app: Flask, other_user: User) -> FlaskClient:
    """Client logged in as a user who does not own the test posts."""
    return _login(app, other_user)


@pytest.fixture
def admin_client(app: Flask, admin_user: User) -> FlaskClient:
    return _login(app, admin_user)

"""Tests for database models."""

import pytest
from sqlalchemy.exc import IntegrityError

from quill.constants import DEFAULT_CATEGORY_COLOR, PostStatus
from quill.extensions import db
from quill.models import Category, Post, PostTag, User


class TestUser:
    """Test cases for User model."""

    def test_user_defaults(self, author):
        assert author.id is not None
        assert len(author.hex_id) == 24
        assert author.role == 'user'
        assert author.is_admin is False
        assert author.created_at is not None

    def test_admin_role(self, admin_user):
        assert admin_user.is_admin is True

    def test_get_id_is_string(self, author):
        assert author.get_id() == str(author.id)


class TestCategory:
    """Test cases for Category model."""

    def test_slug_derived_from_name(self, app):
        category = Category(name='Tech & Science!')
        db.session.add(category)
        db.session.commit()

        assert category.slug == 'tech-science'
        assert category.color == DEFAULT_CATEGORY_COLOR
        assert category.hex_id is not None

    def test_slug_regenerated_on_rename(self, tech_category):
        tech_category.name = 'Web Development'
        db.session.commit()

        assert tech_category.slug == 'web-development'

    def test_name_must_be_unique(self, tech_category):
        db.session.add(Category(name='Tech'))
        with pytest.raises(IntegrityError):
            db.session.commit()
        db.session.rollback()

    def test_slug_must_be_unique(self, tech_category):
        # different name, same slug
        db.session.add(Category(name='TECH!'))
        with pytest.raises(IntegrityError):
            db.session.commit()
        db.session.rollback()


class TestPost:
    """Test cases for Post model."""

    def test_post_defaults(self, app, author):
        post = Post(title='Draft', content='Body', author_id=author.id)
        db.session.add(post)
        db.session.commit()

        assert post.status == PostStatus.DRAFT.value
        assert post.views == 0
        assert list(post.tags) == []
        assert post.created_at is not None
        assert post.updated_at is None

    def test_tags_keep_order(self, make_post):
        post = make_post(tags=('zeta', 'alpha', 'mid'))

        assert list(post.tags) == ['zeta', 'alpha', 'mid']
        assert [t.position for t in post.tag_entries] == [0, 1, 2]

    def test_replacing_tags_removes_old_rows(self, make_post):
        post = make_post(tags=('a', 'b'))
        post.tags = ['c']
        db.session.commit()

        remaining = db.session.execute(db.select(PostTag.name)).scalars().all()
        assert remaining == ['c']

    def test_author_relationship(self, test_post, author):
        assert test_post.author.id == author.id
        assert test_post in author.posts

    def test_deleting_category_detaches_posts(self, test_post, tech_category):
        db.session.delete(tech_category)
        db.session.commit()
        db.session.refresh(test_post)

        assert test_post.categories == []

    def test_deleting_post_removes_tags(self, test_post):
        db.session.delete(test_post)
        db.session.commit()

        assert db.session.execute(db.select(PostTag)).first() is None

    def test_updated_at_set_on_change(self, test_post):
        test_post.title = 'Changed'
        db.session.commit()

        assert test_post.updated_at is not None

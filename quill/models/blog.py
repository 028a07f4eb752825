from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, Index
from sqlalchemy.ext.associationproxy import AssociationProxy, association_proxy
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from quill.constants import (
    DEFAULT_CATEGORY_COLOR,
    MAX_CATEGORY_DESCRIPTION_LENGTH,
    MAX_CATEGORY_NAME_LENGTH,
    MAX_EXCERPT_LENGTH,
    MAX_IMAGE_REF_LENGTH,
    MAX_TAG_LENGTH,
    MAX_TITLE_LENGTH,
    PostStatus,
)
from quill.extensions import db
from quill.models import generate_hex_id, utcnow
from quill.utils.slug import slugify


post_categories = db.Table(
    "post_categories",
    db.Column("post_id", db.ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
    db.Column("category_id", db.ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


class Category(db.Model):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(primary_key=True)
    hex_id: Mapped[str] = mapped_column(db.String(32), unique=True, nullable=False, index=True, default=generate_hex_id)
    name: Mapped[str] = mapped_column(db.String(MAX_CATEGORY_NAME_LENGTH), unique=True, nullable=False)
    slug: Mapped[str] = mapped_column(db.String(60), unique=True, nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(db.String(MAX_CATEGORY_DESCRIPTION_LENGTH), nullable=True)
    color: Mapped[str] = mapped_column(db.String(20), default=DEFAULT_CATEGORY_COLOR, nullable=False)
    created_at: Mapped[datetime] = mapped_column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(db.DateTime(timezone=True), onupdate=utcnow)

    posts: Mapped[list["Post"]] = relationship(secondary=post_categories, back_populates="categories")

    @validates("name")
    def _derive_slug(self, key: str, name: str) -> str:
        # slug always follows the name
        self.slug = slugify(name)
        return name


class PostTag(db.Model):
    __tablename__ = "post_tags"

    id: Mapped[int] = mapped_column(primary_key=True)
    post_id: Mapped[int] = mapped_column(db.ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(db.String(MAX_TAG_LENGTH), nullable=False, index=True)
    position: Mapped[int] = mapped_column(db.Integer, default=0, nullable=False)

    post: Mapped["Post"] = relationship(back_populates="tag_entries")


class Post(db.Model):
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(primary_key=True)
    hex_id: Mapped[str] = mapped_column(db.String(32), unique=True, nullable=False, index=True, default=generate_hex_id)
    title: Mapped[str] = mapped_column(db.String(MAX_TITLE_LENGTH), nullable=False)
    excerpt: Mapped[str | None] = mapped_column(db.String(MAX_EXCERPT_LENGTH), nullable=True)
    content: Mapped[str] = mapped_column(db.Text, nullable=False)
    status: Mapped[str] = mapped_column(db.String(20), default=PostStatus.DRAFT.value, nullable=False, index=True)
    featured_image: Mapped[str | None] = mapped_column(db.String(MAX_IMAGE_REF_LENGTH), nullable=True)
    views: Mapped[int] = mapped_column(db.Integer, default=0, nullable=False)
    author_id: Mapped[int] = mapped_column(db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(db.DateTime(timezone=True), onupdate=utcnow)

    author: Mapped["User"] = relationship(back_populates="posts")
    categories: Mapped[list[Category]] = relationship(
        secondary=post_categories, back_populates="posts", order_by=Category.name
    )
    tag_entries: Mapped[list[PostTag]] = relationship(
        back_populates="post",
        cascade="all, delete-orphan",
        order_by=PostTag.position,
        collection_class=ordering_list("position"),
    )

    tags: AssociationProxy[list[str]] = association_proxy(
        "tag_entries", "name", creator=lambda name: PostTag(name=name)
    )

    __table_args__ = (
        CheckConstraint("views >= 0", name="ck_posts_views_non_negative"),
        Index("ix_posts_status_created_at", "status", "created_at"),
    )

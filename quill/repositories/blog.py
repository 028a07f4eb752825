from __future__ import annotations

from typing import Optional, Sequence

from sqlalchemy import func, or_, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from quill.extensions import db
from quill.constants import PostStatus
from quill.models.blog import Category, Post, PostTag
from quill.schemas.listing import ListingQuery


# Category repositories
def get_category_by_slug(slug: str) -> Optional[Category]:
    return db.session.execute(db.select(Category).filter_by(slug=slug)).scalar_one_or_none()


def get_categories_by_hex_ids(hex_ids: Sequence[str]) -> list[Category]:
    if not hex_ids:
        return []
    rows = db.session.execute(db.select(Category).where(Category.hex_id.in_(hex_ids))).scalars()
    by_id = {c.hex_id: c for c in rows}
    return [by_id[h] for h in hex_ids if h in by_id]


def list_categories() -> list[Category]:
    return list(db.session.execute(db.select(Category).order_by(Category.name)).scalars())


def create_category(*, name: str, description: str | None, color: str) -> Category:
    cat = Category(name=name, description=description, color=color)
    db.session.add(cat)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ValueError("category_conflict")
    return cat


def update_category(cat: Category, *, name: str, description: str | None, color: str) -> Category:
    if cat.name != name:
        cat.name = name
    cat.description = description
    cat.color = color
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ValueError("category_conflict")
    return cat


def delete_category(cat: Category) -> None:
    db.session.delete(cat)
    db.session.commit()


# Post repositories
def _with_relations(stmt):
    return stmt.options(
        selectinload(Post.author),
        selectinload(Post.categories),
        selectinload(Post.tag_entries),
    )


def get_post_by_hex_id(hex_id: str) -> Optional[Post]:
    stmt = _with_relations(db.select(Post).filter_by(hex_id=hex_id))
    return db.session.execute(stmt).scalar_one_or_none()


def build_listing_statement(query: ListingQuery, category: Category | None = None):
    """Build the filtered, ordered select for a listing query.

    Filters combine with AND; the search term matches title, content or
    excerpt case-insensitively. Callers resolve ``query.category`` to a
    Category first and pass it in.
    """
    stmt = db.select(Post).where(Post.status == PostStatus.PUBLISHED.value)

    if category is not None:
        stmt = stmt.where(Post.categories.any(Category.id == category.id))

    if query.tag:
        stmt = stmt.where(Post.tag_entries.any(PostTag.name == query.tag))

    if query.search:
        pattern = "%" + _escape_like(query.search) + "%"
        stmt = stmt.where(
            or_(
                Post.title.ilike(pattern, escape="\\"),
                Post.content.ilike(pattern, escape="\\"),
                Post.excerpt.ilike(pattern, escape="\\"),
            )
        )

    # newest first; equal timestamps keep insertion order
    return stmt.order_by(Post.created_at.desc(), Post.id.asc())


def list_posts(query: ListingQuery) -> tuple[list[Post], int]:
    """One page of the listing plus the total match count.

    A page past the end returns no items without running the item query,
    and the row limit never exceeds what is left, so arbitrarily large
    page or limit values stay within the database integer range.
    """
    category = None
    if query.category:
        category = get_category_by_slug(query.category)
        if not category:
            return [], 0
    stmt = build_listing_statement(query, category)
    total = db.session.execute(
        db.select(func.count()).select_from(stmt.order_by(None).subquery())
    ).scalar_one()
    if query.offset >= total:
        return [], total
    page_stmt = _with_relations(stmt).offset(query.offset).limit(min(query.limit, total - query.offset))
    return list(db.session.execute(page_stmt).scalars()), total


def create_post(
    *,
    title: str,
    content: str,
    excerpt: str | None,
    status: str,
    tags: list[str],
    categories: list[Category],
    featured_image: str | None,
    author_id: int,
) -> Post:
    p = Post(
        title=title,
        content=content,
        excerpt=excerpt,
        status=status,
        featured_image=featured_image,
        author_id=author_id,
    )
    p.tags = tags
    p.categories = categories
    db.session.add(p)
    db.session.commit()
    return p


def update_post(
    p: Post,
    *,
    title: str,
    content: str,
    excerpt: str | None,
    status: str,
    tags: list[str],
    categories: list[Category],
    featured_image: str | None,
) -> Post:
    p.title = title
    p.content = content
    p.excerpt = excerpt
    p.status = status
    p.featured_image = featured_image
    if list(p.tags) != tags:
        p.tags = tags
    p.categories = categories
    db.session.commit()
    return p


def delete_post(p: Post) -> None:
    db.session.delete(p)
    db.session.commit()


def increment_post_views(p: Post) -> Post:
    """Add one view in a single UPDATE so concurrent readers never lose a count."""
    db.session.execute(
        update(Post).where(Post.id == p.id).values(views=Post.views + 1)
    )
    db.session.commit()
    db.session.refresh(p)
    return p


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")

from __future__ import annotations

from typing import Any, Mapping

import structlog

from quill.errors import ConflictError, NotFoundError
from quill.extensions import cache
from quill.models import Category, User
from quill.repositories import blog as repo
from quill.schemas.categories import CategoryCreate, CategoryUpdate, parse_category

log = structlog.get_logger(__name__)

CATEGORY_LIST_CACHE_KEY = "categories:list"

_FIELDS = ("name", "description", "color")


def list_categories() -> list[Category]:
    return repo.list_categories()


def get_category(slug: str) -> Category:
    cat = repo.get_category_by_slug(slug)
    if not cat:
        raise NotFoundError("Category not found")
    return cat


def create_category(caller: User, data: Mapping[str, Any]) -> Category:
    payload = parse_category(CategoryCreate, dict(data))
    try:
        cat = repo.create_category(name=payload.name, description=payload.description, color=payload.color)
    except ValueError:
        raise ConflictError("A category with this name already exists")
    cache.delete(CATEGORY_LIST_CACHE_KEY)
    log.info("category_created", slug=cat.slug, caller_id=caller.hex_id)
    return cat


def update_category(caller: User, slug: str, data: Mapping[str, Any]) -> Category:
    cat = get_category(slug)
    merged = {"name": cat.name, "description": cat.description, "color": cat.color}
    merged.update({k: v for k, v in data.items() if k in _FIELDS})
    payload = parse_category(CategoryUpdate, merged)
    try:
        cat = repo.update_category(cat, name=payload.name, description=payload.description, color=payload.color)
    except ValueError:
        raise ConflictError("A category with this name already exists")
    cache.delete(CATEGORY_LIST_CACHE_KEY)
    log.info("category_updated", old_slug=slug, slug=cat.slug, caller_id=caller.hex_id)
    return cat


def delete_category(caller: User, slug: str) -> None:
    cat = get_category(slug)
    repo.delete_category(cat)
    cache.delete(CATEGORY_LIST_CACHE_KEY)
    log.info("category_deleted", slug=slug, caller_id=caller.hex_id)

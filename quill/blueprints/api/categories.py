from __future__ import annotations

from flask import Blueprint, jsonify
from flask_login import current_user

from quill.blueprints.api import json_body
from quill.decorators import admin_required
from quill.extensions import cache, limiter
from quill.serializers import category_to_dict
from quill.services import categories as category_svc
from quill.services.categories import CATEGORY_LIST_CACHE_KEY

bp = Blueprint("categories", __name__, url_prefix="/api/categories")


@bp.get("")
@limiter.limit("120 per minute")
@cache.cached(key_prefix=CATEGORY_LIST_CACHE_KEY)
def list_categories():
    cats = category_svc.list_categories()
    return jsonify({"success": True, "count": len(cats), "data": [category_to_dict(c, detail=True) for c in cats]})


@bp.get("/<slug>")
@limiter.limit("120 per minute")
def get_category(slug: str):
    cat = category_svc.get_category(slug)
    return jsonify({"success": True, "data": category_to_dict(cat, detail=True)})


@bp.post("")
@limiter.limit("10 per minute; 150 per hour")
@admin_required
def create_category():
    cat = category_svc.create_category(current_user, json_body())
    return jsonify({"success": True, "data": category_to_dict(cat, detail=True)}), 201


@bp.put("/<slug>")
@limiter.limit("10 per minute; 150 per hour")
@admin_required
def update_category(slug: str):
    cat = category_svc.update_category(current_user, slug, json_body())
    return jsonify({"success": True, "data": category_to_dict(cat, detail=True)})


@bp.delete("/<slug>")
@limiter.limit("10 per minute; 150 per hour")
@admin_required
def delete_category(slug: str):
    category_svc.delete_category(current_user, slug)
    return jsonify({"success": True, "message": "Category deleted successfully"})

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user

from quill.blueprints.api import json_body
from quill.decorators import api_login_required
from quill.extensions import limiter
from quill.schemas.listing import parse_listing_query
from quill.serializers import post_to_dict
from quill.services import posts as post_svc

bp = Blueprint("posts", __name__, url_prefix="/api/posts")


@bp.get("")
@limiter.limit("120 per minute")
def list_posts():
    """Published posts, filtered and paginated"""
    query = parse_listing_query(request.args, default_limit=current_app.config.get("POSTS_PER_PAGE", 10))
    result = post_svc.list_posts(query)
    return jsonify(
        {
            "success": True,
            "count": len(result.items),
            "pagination": {
                "page": result.page,
                "pages": result.total_pages,
                "total": result.total_count,
            },
            "data": [post_to_dict(p) for p in result.items],
        }
    )


@bp.get("/<string:post_id>")
@limiter.limit("120 per minute")
def get_post(post_id: str):
    """Single post with full author and category detail; counts a view"""
    post = post_svc.get_post(post_id)
    return jsonify({"success": True, "data": post_to_dict(post, detail=True)})


@bp.post("")
@limiter.limit("10 per minute; 150 per hour")
@api_login_required
def create_post():
    post = post_svc.create_post(current_user, json_body())
    return jsonify({"success": True, "data": post_to_dict(post)}), 201


@bp.put("/<string:post_id>")
@limiter.limit("30 per minute")
@api_login_required
def update_post(post_id: str):
    post = post_svc.update_post(current_user, post_id, json_body())
    return jsonify({"success": True, "data": post_to_dict(post)})


@bp.delete("/<string:post_id>")
@limiter.limit("10 per minute")
@api_login_required
def delete_post(post_id: str):
    post_svc.delete_post(current_user, post_id)
    return jsonify({"success": True, "message": "Post deleted successfully"})

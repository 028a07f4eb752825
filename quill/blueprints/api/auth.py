from __future__ import annotations

from flask import Blueprint, jsonify
from flask_login import current_user, login_user, logout_user
from pydantic import ValidationError

from quill.blueprints.api import json_body
from quill.decorators import api_login_required
from quill.errors import AuthenticationRequired
from quill.extensions import limiter
from quill.schemas.auth import LoginRequest
from quill.serializers import user_to_dict
from quill.services import auth as auth_svc

bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@bp.post("/login")
@limiter.limit("5 per minute; 20 per hour")
def login():
    try:
        payload = LoginRequest.model_validate(json_body())
    except ValidationError:
        raise AuthenticationRequired("Invalid username or password")
    user = auth_svc.authenticate(payload.username, payload.password)
    if not user:
        raise AuthenticationRequired("Invalid username or password")
    login_user(user, remember=False)
    return jsonify({"success": True, "data": user_to_dict(user)})


@bp.post("/logout")
def logout():
    logout_user()
    return jsonify({"success": True, "message": "Logged out"})


@bp.get("/me")
@api_login_required
def me():
    return jsonify({"success": True, "data": user_to_dict(current_user)})

from __future__ import annotations

from functools import wraps
from typing import Callable, Any

from flask_login import current_user

from quill.errors import AuthenticationRequired, ForbiddenError


def api_login_required(fn: Callable[..., Any]) -> Callable[..., Any]:
    @wraps(fn)
    def wrapper(*args, **kwargs):
        if not current_user.is_authenticated:
            raise AuthenticationRequired()
        return fn(*args, **kwargs)

    return wrapper


def admin_required(fn: Callable[..., Any]) -> Callable[..., Any]:
    @wraps(fn)
    @api_login_required
    def wrapper(*args, **kwargs):
        if not getattr(current_user, "is_admin", False):
            raise ForbiddenError("Admin privileges required")
        return fn(*args, **kwargs)

    return wrapper

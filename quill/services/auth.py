from __future__ import annotations

from quill.models.user import User
from quill.repositories.user import get_user_by_username
from quill.utils.crypto import verify_password


def authenticate(username: str, password: str) -> User | None:
    user = get_user_by_username(username)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user

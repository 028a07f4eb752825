from __future__ import annotations

from typing import Optional

from quill.extensions import db
from quill.constants import UserRole
from quill.models.user import User


def get_user_by_id(user_id: int) -> Optional[User]:
    return db.session.get(User, user_id)


def get_user_by_username(username: str) -> Optional[User]:
    return db.session.execute(db.select(User).filter_by(username=username)).scalar_one_or_none()


def create_user(*, username: str, email: str, password_hash: str, role: UserRole = UserRole.USER) -> User:
    user = User(username=username, email=email, password_hash=password_hash, role=role.value)
    db.session.add(user)
    db.session.commit()
    return user

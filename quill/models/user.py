from __future__ import annotations

from datetime import datetime

from flask_login import UserMixin
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quill.constants import MAX_BIO_LENGTH, UserRole
from quill.extensions import db
from quill.models import generate_hex_id, utcnow


class User(db.Model, UserMixin):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    hex_id: Mapped[str] = mapped_column(db.String(32), unique=True, nullable=False, index=True, default=generate_hex_id)
    username: Mapped[str] = mapped_column(db.String(30), unique=True, nullable=False, index=True)
    email: Mapped[str] = mapped_column(db.String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(db.String(255), nullable=False)
    role: Mapped[str] = mapped_column(db.String(10), default=UserRole.USER.value, nullable=False)
    avatar: Mapped[str | None] = mapped_column(db.String(255), nullable=True)
    bio: Mapped[str | None] = mapped_column(db.String(MAX_BIO_LENGTH), nullable=True)
    created_at: Mapped[datetime] = mapped_column(db.DateTime(timezone=True), default=utcnow, nullable=False)

    posts: Mapped[list["Post"]] = relationship(back_populates="author", cascade="all, delete-orphan")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def get_id(self) -> str:  # Flask-Login compatibility
        return str(self.id)

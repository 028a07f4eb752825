"""Values shared by the server and the client package."""
from __future__ import annotations

from enum import Enum

MAX_TITLE_LENGTH = 200
MAX_EXCERPT_LENGTH = 300
MAX_TAG_LENGTH = 50
MAX_IMAGE_REF_LENGTH = 255
MAX_BIO_LENGTH = 500
MAX_CATEGORY_NAME_LENGTH = 50
MAX_CATEGORY_DESCRIPTION_LENGTH = 200

POSTS_PER_PAGE = 10

DEFAULT_CATEGORY_COLOR = "#6c757d"


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class PostStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class PostField(str, Enum):
    """Client-writable post fields; the only keys a post error may carry."""

    TITLE = "title"
    EXCERPT = "excerpt"
    CONTENT = "content"
    STATUS = "status"
    TAGS = "tags"
    CATEGORIES = "categories"
    FEATURED_IMAGE = "featured_image"

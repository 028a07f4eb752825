from quill.repositories.user import (
    get_user_by_id,
    get_user_by_username,
    create_user,
)
from quill.repositories.blog import (
    get_category_by_slug,
    get_post_by_hex_id,
    list_categories,
    list_posts,
)

__all__ = [
    # User repositories
    "get_user_by_id",
    "get_user_by_username",
    "create_user",
    # Blog repositories
    "get_category_by_slug",
    "get_post_by_hex_id",
    "list_categories",
    "list_posts",
]

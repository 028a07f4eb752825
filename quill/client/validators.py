"""Form checks run before a post is sent, mirroring the server rules."""
from __future__ import annotations

from typing import Any, Mapping

from quill.client.errors import FieldErrors
from quill.constants import MAX_EXCERPT_LENGTH, MAX_TITLE_LENGTH, PostField


def parse_tags(text: str) -> list[str]:
    """Split comma-separated tag input, trimming and dropping blanks."""
    return [t.strip() for t in (text or "").split(",") if t.strip()]


def validate_post_form(data: Mapping[str, Any]) -> FieldErrors:
    errors: FieldErrors = {}

    title = (data.get("title") or "").strip()
    if not title:
        errors[PostField.TITLE] = "Title is required"
    elif len(title) > MAX_TITLE_LENGTH:
        errors[PostField.TITLE] = f"Title cannot be more than {MAX_TITLE_LENGTH} characters"

    if not (data.get("content") or "").strip():
        errors[PostField.CONTENT] = "Content is required"

    excerpt = (data.get("excerpt") or "").strip()
    if len(excerpt) > MAX_EXCERPT_LENGTH:
        errors[PostField.EXCERPT] = f"Excerpt cannot be more than {MAX_EXCERPT_LENGTH} characters"

    return errors

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from quill.errors import ValidationFailed
from quill.constants import (
    MAX_EXCERPT_LENGTH,
    MAX_IMAGE_REF_LENGTH,
    MAX_TAG_LENGTH,
    MAX_TITLE_LENGTH,
    PostField,
    PostStatus,
)
from quill.schemas.errors import REQUIRED, field_errors

POST_FIELDS = tuple(f.value for f in PostField)

POST_MESSAGES = {
    "title": {
        REQUIRED: "Title is required",
        "string_too_long": f"Title cannot be more than {MAX_TITLE_LENGTH} characters",
    },
    "content": {REQUIRED: "Content is required"},
    "excerpt": {"string_too_long": f"Excerpt cannot be more than {MAX_EXCERPT_LENGTH} characters"},
    "status": {"enum": "Status must be either draft or published"},
    "featured_image": {"string_too_long": f"Featured image reference cannot be more than {MAX_IMAGE_REF_LENGTH} characters"},
}


class PostCreate(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=MAX_TITLE_LENGTH)
    content: str = Field(min_length=1)
    excerpt: str | None = Field(default=None, max_length=MAX_EXCERPT_LENGTH)
    status: PostStatus = PostStatus.DRAFT
    tags: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)
    featured_image: str | None = Field(default=None, max_length=MAX_IMAGE_REF_LENGTH)

    @field_validator("excerpt", "featured_image")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        return v or None

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: list[str]) -> list[str]:
        tags = [t.strip() for t in v if t and t.strip()]
        if any(len(t) > MAX_TAG_LENGTH for t in tags):
            raise ValueError(f"Tags cannot be more than {MAX_TAG_LENGTH} characters")
        return tags

    @field_validator("categories")
    @classmethod
    def unique_categories(cls, v: list[str]) -> list[str]:
        # categories form a set; keep first-seen order
        return list(dict.fromkeys(c.strip() for c in v if c and c.strip()))


class PostUpdate(PostCreate):
    pass


def parse_post(schema: type[PostCreate], data: dict) -> PostCreate:
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise ValidationFailed(field_errors(e, POST_MESSAGES)) from e

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from quill.errors import ValidationFailed
from quill.constants import (
    DEFAULT_CATEGORY_COLOR,
    MAX_CATEGORY_DESCRIPTION_LENGTH,
    MAX_CATEGORY_NAME_LENGTH,
)
from quill.schemas.errors import REQUIRED, field_errors
from quill.utils.slug import slugify

CATEGORY_MESSAGES = {
    "name": {
        REQUIRED: "Category name is required",
        "string_too_long": f"Category name cannot be more than {MAX_CATEGORY_NAME_LENGTH} characters",
    },
    "description": {"string_too_long": f"Description cannot be more than {MAX_CATEGORY_DESCRIPTION_LENGTH} characters"},
    "color": {"string_pattern_mismatch": "Color must be a hex value like #6c757d"},
}


class CategoryCreate(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=MAX_CATEGORY_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=MAX_CATEGORY_DESCRIPTION_LENGTH)
    color: str = Field(default=DEFAULT_CATEGORY_COLOR, pattern=r"^#[0-9a-fA-F]{3}([0-9a-fA-F]{3})?$")

    @field_validator("name")
    @classmethod
    def name_has_slug(cls, v: str) -> str:
        if not slugify(v).strip("-"):
            raise ValueError("Category name must contain letters or numbers")
        return v


class CategoryUpdate(CategoryCreate):
    pass


def parse_category(schema: type[CategoryCreate], data: dict) -> CategoryCreate:
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise ValidationFailed(field_errors(e, CATEGORY_MESSAGES)) from e

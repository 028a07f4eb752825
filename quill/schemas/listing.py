from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from quill.errors import ValidationFailed
from quill.schemas.errors import field_errors

T = TypeVar("T")

LISTING_MESSAGES = {
    "page": {
        "int_parsing": "Page must be a positive integer",
        "greater_than_equal": "Page must be a positive integer",
    },
    "limit": {
        "int_parsing": "Limit must be a positive integer",
        "greater_than_equal": "Limit must be a positive integer",
    },
}


class ListingQuery(BaseModel):
    """One list request. Filters left as None impose no constraint."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)
    category: str | None = None
    tag: str | None = None
    search: str | None = None

    @field_validator("category", "tag")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        return v.strip() if v and v.strip() else None

    @field_validator("search")
    @classmethod
    def raw_search(cls, v: str | None) -> str | None:
        # matched as a raw substring; only a blank term is dropped
        return v if v and v.strip() else None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def parse_listing_query(args: dict, default_limit: int = 10) -> ListingQuery:
    data = {k: v for k, v in args.items() if v != ""}
    data.setdefault("limit", default_limit)
    try:
        return ListingQuery.model_validate(data)
    except ValidationError as e:
        raise ValidationFailed(field_errors(e, LISTING_MESSAGES)) from e


@dataclass(frozen=True)
class ResultEnvelope(Generic[T]):
    items: Sequence[T]
    page: int
    limit: int
    total_count: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.limit)

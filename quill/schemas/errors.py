"""Translate pydantic validation errors into field-keyed API errors."""
from __future__ import annotations

from typing import Mapping

from pydantic import ValidationError

from quill.errors import FieldError

REQUIRED = "required"

_REQUIRED_TYPES = {"missing", "string_too_short"}


def _kind(err: Mapping) -> str:
    kind = err["type"]
    if kind in _REQUIRED_TYPES:
        return REQUIRED
    if kind == "string_type" and err.get("input") is None:
        return REQUIRED
    return kind


def field_errors(exc: ValidationError, messages: Mapping[str, Mapping[str, str]]) -> list[FieldError]:
    """Return one FieldError per violated field, in the order pydantic reports them.

    ``messages`` maps a field name to ``{error kind: message}``. Kinds are the
    pydantic error types, with missing/empty values folded into ``"required"``.
    Errors raised from custom validators keep their own message.
    """
    seen: set[str] = set()
    result: list[FieldError] = []
    for err in exc.errors():
        path = str(err["loc"][0]) if err["loc"] else "__root__"
        if path in seen:
            continue
        seen.add(path)
        kind = _kind(err)
        msg = messages.get(path, {}).get(kind)
        if msg is None:
            if kind == "value_error" and "ctx" in err:
                msg = str(err["ctx"]["error"])
            else:
                msg = err["msg"]
        result.append(FieldError(path=path, msg=msg))
    return result

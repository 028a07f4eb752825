from __future__ import annotations

from flask import request

from quill.errors import ValidationFailed, FieldError


def json_body() -> dict:
    """Return the request's JSON object or fail validation."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationFailed([FieldError(path="body", msg="Request body must be a JSON object")])
    return data
